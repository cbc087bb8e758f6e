"""Dashboard endpoints: headline stats and the team roster"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from taskzenith.api.v1.serializers import serialize_profile
from taskzenith.database import get_db
from taskzenith.models import Profile, Project, Task, TaskStatus, task_assignees
from taskzenith.schemas import StatsResponse, TeamMemberResponse

router = APIRouter()

ACTIVE_STATUSES = (TaskStatus.TODO, TaskStatus.IN_PROGRESS)
OPEN_STATUSES = (TaskStatus.BACKLOG, TaskStatus.TODO, TaskStatus.IN_PROGRESS)


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    return StatsResponse(
        total_projects=db.query(func.count(Project.id)).scalar() or 0,
        active_tasks=db.query(func.count(Task.id)).filter(Task.status.in_(ACTIVE_STATUSES)).scalar() or 0,
        tasks_completed=db.query(func.count(Task.id)).filter(Task.status == TaskStatus.DONE).scalar() or 0,
        team_members=db.query(func.count(Profile.id)).scalar() or 0,
    )


@router.get("/team", response_model=List[TeamMemberResponse])
def list_team(db: Session = Depends(get_db)):
    """Every profile with the number of open tasks assigned to it."""
    open_counts = dict(
        db.query(task_assignees.c.profile_id, func.count(Task.id))
        .join(Task, Task.id == task_assignees.c.task_id)
        .filter(Task.status.in_(OPEN_STATUSES))
        .group_by(task_assignees.c.profile_id)
        .all()
    )
    members = []
    for profile in db.query(Profile).order_by(Profile.name.asc()).all():
        summary = serialize_profile(profile)
        members.append(TeamMemberResponse(**summary.model_dump(), active_tasks=open_counts.get(profile.id, 0)))
    return members
