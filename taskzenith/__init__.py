"""TaskZenith: collaborative project and kanban task management."""

__version__ = "1.0.0"
