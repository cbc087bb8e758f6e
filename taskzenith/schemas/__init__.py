"""
Pydantic schemas for request/response validation
"""
from taskzenith.schemas.profile import ProfileSummary, TeamMemberResponse
from taskzenith.schemas.comment import CommentCreate, CommentResponse
from taskzenith.schemas.task import TaskCreate, TaskUpdate, TaskResponse, ProjectRef
from taskzenith.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse, ProjectMemberResponse
from taskzenith.schemas.stats import StatsResponse

__all__ = [
    "ProfileSummary",
    "TeamMemberResponse",
    "CommentCreate",
    "CommentResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "ProjectRef",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectMemberResponse",
    "StatsResponse",
]
