"""Schemas for tasks"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from taskzenith.models import TaskPriority, TaskStatus
from taskzenith.schemas.base import CamelModel
from taskzenith.schemas.comment import CommentResponse
from taskzenith.schemas.profile import ProfileSummary


class TaskCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    priority: TaskPriority
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    assignees: List[str] = Field(default_factory=list)


class TaskUpdate(CamelModel):
    """Partial update; only the fields present in the request are applied.

    ``title`` and ``priority`` stay loosely typed so that a present-but-empty
    value can be answered with a 400 instead of a schema error.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[str] = None
    due_date: Optional[datetime] = None
    assignees: Optional[List[str]] = None


class ProjectRef(CamelModel):
    id: str
    name: str
    color: Optional[str] = None


class TaskResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    assignees: List[ProfileSummary] = Field(default_factory=list)
    project_id: str
    project: Optional[ProjectRef] = None
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    comments: List[CommentResponse] = Field(default_factory=list)
