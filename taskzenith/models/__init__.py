"""TaskZenith Database Models"""
from taskzenith.models.profile import Profile
from taskzenith.models.project import Project, ProjectStatus, DEFAULT_PROJECT_COLOR
from taskzenith.models.project_member import ProjectMember, ProjectRole
from taskzenith.models.task import Task, TaskStatus, TaskPriority, task_assignees
from taskzenith.models.comment import Comment
from taskzenith.utils.primary_keys import register_uuid_pk_listener

__all__ = [
    "Profile",
    "Project",
    "ProjectStatus",
    "DEFAULT_PROJECT_COLOR",
    "ProjectMember",
    "ProjectRole",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "task_assignees",
    "Comment",
]


for _model in (
    Profile,
    Project,
    Task,
    Comment,
):
    register_uuid_pk_listener(_model)
