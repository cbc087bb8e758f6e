"""Schemas for team member profiles"""
from pydantic import Field

from taskzenith.schemas.base import CamelModel


class ProfileSummary(CamelModel):
    id: str
    name: str
    email: str
    avatar: str


class TeamMemberResponse(ProfileSummary):
    active_tasks: int = Field(0, ge=0)
