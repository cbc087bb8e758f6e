"""Query helpers shared by the routers"""
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from taskzenith.models import Comment, Profile, Task


def task_query(db: Session):
    """Tasks with everything ``serialize_task`` reads, loaded up front."""
    return db.query(Task).options(
        selectinload(Task.project),
        selectinload(Task.assignees),
        selectinload(Task.comments).selectinload(Comment.author),
    )


def resolve_profiles(db: Session, profile_ids: List[str]) -> List[Profile]:
    wanted = set(profile_ids)
    if not wanted:
        return []
    profiles = db.query(Profile).filter(Profile.id.in_(wanted)).all()
    missing = wanted - {profile.id for profile in profiles}
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown assignees: {', '.join(sorted(missing))}",
        )
    return profiles


def next_position(db: Session, project_id: str) -> int:
    current = db.query(func.max(Task.position)).filter(Task.project_id == project_id).scalar()
    return (current or 0) + 1
