"""Schemas for dashboard statistics"""
from taskzenith.schemas.base import CamelModel


class StatsResponse(CamelModel):
    total_projects: int
    active_tasks: int
    tasks_completed: int
    team_members: int
