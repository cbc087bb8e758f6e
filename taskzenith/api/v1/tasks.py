"""Task endpoints: cross-project listing, partial update and deletion"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from taskzenith.api.v1.queries import next_position, resolve_profiles, task_query
from taskzenith.api.v1.serializers import serialize_task
from taskzenith.database import get_db
from taskzenith.models import Task, TaskPriority
from taskzenith.models.timestamps import utcnow
from taskzenith.schemas import TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

PRIORITY_VALUES = {priority.value for priority in TaskPriority}


def _load_task(db: Session, task_id: str) -> Task:
    task = task_query(db).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=List[TaskResponse])
def list_tasks(db: Session = Depends(get_db)):
    """Every task of every project, each carrying its project reference."""
    tasks = task_query(db).order_by(Task.created_at.asc()).all()
    return [serialize_task(task, task.project) for task in tasks]


@router.api_route("/{task_id}", methods=["PUT", "PATCH"], response_model=TaskResponse)
def update_task(task_id: str, task_update: TaskUpdate, db: Session = Depends(get_db)):
    """Apply a partial update to a task.

    Only the fields present in the body are touched, so a drag-and-drop move can
    send ``{"status": "done"}`` alone. Title and priority are validated only when
    they are being changed.
    """
    task = _load_task(db, task_id)
    update_data = task_update.model_dump(exclude_unset=True)

    if "title" in update_data:
        title = (update_data["title"] or "").strip()
        if not title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
        update_data["title"] = title
    if "priority" in update_data:
        priority = update_data["priority"]
        if not priority:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Priority is required")
        if priority not in PRIORITY_VALUES:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid priority: {priority}")
        update_data["priority"] = TaskPriority(priority)
    if "status" in update_data and update_data["status"] is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Status cannot be empty")

    assignee_ids = update_data.pop("assignees", None)
    if "description" in update_data:
        update_data["description"] = update_data["description"] or None

    new_status = update_data.get("status")
    if new_status is not None and new_status != task.status:
        # A moved card lands at the bottom of its new column
        task.position = next_position(db, task.project_id)

    for field, value in update_data.items():
        setattr(task, field, value)

    if assignee_ids is not None:
        task.assignees = resolve_profiles(db, assignee_ids)

    task.updated_at = utcnow()
    db.commit()

    logger.debug("Updated task %s fields=%s", task_id, sorted(update_data))
    updated = _load_task(db, task_id)
    return serialize_task(updated, updated.project)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    task = _load_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info("Deleted task %s", task_id)
