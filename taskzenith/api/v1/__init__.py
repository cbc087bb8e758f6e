"""Version 1 REST routers"""
from fastapi import APIRouter

from taskzenith.api.v1 import comments, dashboard, projects, tasks

api_router = APIRouter(prefix="/api")
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(comments.router, prefix="/tasks", tags=["comments"])
api_router.include_router(dashboard.router, tags=["dashboard"])

__all__ = ["api_router"]
