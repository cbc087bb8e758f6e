"""Schemas for task comments"""
from datetime import datetime

from pydantic import Field

from taskzenith.schemas.base import CamelModel
from taskzenith.schemas.profile import ProfileSummary


class CommentCreate(CamelModel):
    content: str = Field(..., min_length=1)
    author_id: str


class CommentResponse(CamelModel):
    id: str
    content: str
    created_at: datetime
    author: ProfileSummary
