"""ORM -> response schema conversion shared by the routers"""
from typing import Optional

from taskzenith.models import Comment, Profile, Project, Task
from taskzenith.schemas import CommentResponse, ProfileSummary, ProjectRef, TaskResponse


def serialize_profile(profile: Profile) -> ProfileSummary:
    return ProfileSummary(
        id=profile.id,
        name=profile.name,
        email=profile.display_email,
        avatar=profile.display_avatar,
    )


def serialize_comment(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        created_at=comment.created_at,
        author=serialize_profile(comment.author),
    )


def serialize_task(task: Task, project: Optional[Project] = None) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        assignees=[serialize_profile(profile) for profile in task.assignees],
        project_id=task.project_id,
        project=ProjectRef(id=project.id, name=project.name, color=project.color) if project else None,
        due_date=task.due_date,
        created_at=task.created_at,
        updated_at=task.updated_at,
        comments=[serialize_comment(comment) for comment in task.comments],
    )
