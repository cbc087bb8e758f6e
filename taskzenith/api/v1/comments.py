"""Task comment endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from taskzenith.api.v1.serializers import serialize_comment
from taskzenith.database import get_db
from taskzenith.models import Comment, Profile, Task
from taskzenith.schemas import CommentCreate, CommentResponse

router = APIRouter()


def _ensure_task(db: Session, task_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/{task_id}/comments", response_model=List[CommentResponse])
def list_task_comments(task_id: str, db: Session = Depends(get_db)):
    """Return the comments of a task, oldest first."""
    task = _ensure_task(db, task_id)
    comments = (
        db.query(Comment)
        .options(selectinload(Comment.author))
        .filter(Comment.task_id == task.id)
        .order_by(Comment.created_at.asc())
        .all()
    )
    return [serialize_comment(comment) for comment in comments]


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(task_id: str, comment_in: CommentCreate, db: Session = Depends(get_db)):
    task = _ensure_task(db, task_id)

    content = comment_in.content.strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment content is required")

    author = db.query(Profile).filter(Profile.id == comment_in.author_id).first()
    if author is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    comment = Comment(content=content, task_id=task.id, author_id=author.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return serialize_comment(comment)
