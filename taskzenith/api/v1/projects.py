"""Project endpoints, including the board's task listing"""
import logging
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from taskzenith.api.v1.queries import next_position, resolve_profiles, task_query
from taskzenith.api.v1.serializers import serialize_profile, serialize_task
from taskzenith.database import get_db
from taskzenith.models import (
    DEFAULT_PROJECT_COLOR,
    Profile,
    Project,
    ProjectMember,
    ProjectRole,
    ProjectStatus,
    Task,
    TaskStatus,
)
from taskzenith.models.timestamps import utcnow
from taskzenith.schemas import (
    ProjectCreate,
    ProjectMemberResponse,
    ProjectResponse,
    ProjectUpdate,
    TaskCreate,
    TaskResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_project(db: Session, project_id: str) -> Project:
    project = (
        db.query(Project)
        .options(selectinload(Project.members).selectinload(ProjectMember.profile))
        .filter(Project.id == project_id)
        .first()
    )
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def project_progress(db: Session, project_id: str) -> int:
    """Percentage of the project's tasks that are done, rounded half up."""
    total = db.query(func.count(Task.id)).filter(Task.project_id == project_id).scalar() or 0
    if total == 0:
        return 0
    completed = (
        db.query(func.count(Task.id))
        .filter(Task.project_id == project_id, Task.status == TaskStatus.DONE)
        .scalar()
        or 0
    )
    return int(math.floor(completed * 100 / total + 0.5))


def effective_status(stored: ProjectStatus, progress: int) -> ProjectStatus:
    if progress == 100:
        return ProjectStatus.COMPLETED
    if stored == ProjectStatus.COMPLETED:
        # Tasks were added or reopened after completion
        return ProjectStatus.ON_TRACK
    return stored


def _serialize_project(db: Session, project: Project) -> ProjectResponse:
    progress = project_progress(db, project.id)
    return ProjectResponse(
        id=project.id,
        name=project.name,
        description=project.description,
        color=project.color,
        status=effective_status(project.status, progress),
        progress=progress,
        members=[
            ProjectMemberResponse(user=serialize_profile(member.profile), role=member.role)
            for member in project.members
        ],
        created_at=project.created_at,
    )


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of projects to return"),
    db: Session = Depends(get_db),
):
    """List projects with their computed progress."""
    query = (
        db.query(Project)
        .options(selectinload(Project.members).selectinload(ProjectMember.profile))
        .order_by(Project.created_at.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    return [_serialize_project(db, project) for project in query.all()]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(project_in: ProjectCreate, db: Session = Depends(get_db)):
    """Create a project, registering the owner as its first member when given."""
    name = project_in.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project name is required")

    owner = None
    if project_in.owner_id is not None:
        owner = db.query(Profile).filter(Profile.id == project_in.owner_id).first()
        if owner is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Owner profile not found")

    project = Project(
        name=name,
        description=project_in.description or "",
        color=project_in.color or DEFAULT_PROJECT_COLOR,
        status=ProjectStatus.ON_TRACK,
    )
    db.add(project)
    db.flush()
    if owner is not None:
        db.add(ProjectMember(project_id=project.id, profile_id=owner.id, role=ProjectRole.OWNER))
    db.commit()

    logger.info("Created project %s (%s)", project.id, project.name)
    return _serialize_project(db, _load_project(db, project.id))


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, db: Session = Depends(get_db)):
    """Return one project; its status follows the task completion ratio."""
    return _serialize_project(db, _load_project(db, project_id))


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: str, project_update: ProjectUpdate, db: Session = Depends(get_db)):
    """Change the fields present in the body; members are managed separately."""
    project = _load_project(db, project_id)
    update_data = project_update.model_dump(exclude_unset=True)

    if "name" in update_data:
        name = (update_data["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project name is required")
        update_data["name"] = name
    if "description" in update_data:
        update_data["description"] = update_data["description"] or ""
    if "color" in update_data:
        update_data["color"] = update_data["color"] or DEFAULT_PROJECT_COLOR
    if "status" in update_data and update_data["status"] is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Status cannot be empty")

    for field, value in update_data.items():
        setattr(project, field, value)
    project.updated_at = utcnow()
    db.commit()

    logger.info("Updated project %s fields=%s", project_id, sorted(update_data))
    return _serialize_project(db, _load_project(db, project_id))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: str, db: Session = Depends(get_db)):
    project = _load_project(db, project_id)
    db.delete(project)
    db.commit()
    logger.info("Deleted project %s", project_id)


@router.get("/{project_id}/tasks", response_model=List[TaskResponse])
def list_project_tasks(project_id: str, db: Session = Depends(get_db)):
    """Return the full task list of a project in board order."""
    project = _load_project(db, project_id)
    tasks = (
        task_query(db)
        .filter(Task.project_id == project.id)
        .order_by(Task.position.asc(), Task.created_at.asc())
        .all()
    )
    return [serialize_task(task, project) for task in tasks]


@router.post("/{project_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_project_task(project_id: str, task_in: TaskCreate, db: Session = Depends(get_db)):
    """Create a task in the project's To Do column."""
    project = _load_project(db, project_id)
    title = task_in.title.strip()
    if not title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title and priority are required")

    task = Task(
        title=title,
        description=task_in.description or None,
        status=TaskStatus.TODO,
        priority=task_in.priority,
        due_date=task_in.due_date,
        project_id=project.id,
        position=next_position(db, project.id),
    )
    task.assignees = resolve_profiles(db, task_in.assignees)
    db.add(task)
    db.commit()

    created = task_query(db).filter(Task.id == task.id).one()
    logger.info("Created task %s in project %s", created.id, project.id)
    return serialize_task(created, project)
