"""Schemas for projects and their members"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from taskzenith.models import ProjectRole, ProjectStatus
from taskzenith.schemas.base import CamelModel
from taskzenith.schemas.profile import ProfileSummary


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = None
    owner_id: Optional[str] = None


class ProjectUpdate(CamelModel):
    """Partial update; an empty ``color`` resets to the default."""

    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    status: Optional[ProjectStatus] = None


class ProjectMemberResponse(CamelModel):
    user: ProfileSummary
    role: ProjectRole


class ProjectResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    status: ProjectStatus
    progress: int = Field(0, ge=0, le=100)
    members: List[ProjectMemberResponse] = Field(default_factory=list)
    created_at: datetime
