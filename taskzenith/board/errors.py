"""Errors raised by task store implementations."""
from typing import Optional


class TaskStoreError(Exception):
    """A task store call failed (transport, timeout, bad status or bad payload)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class FetchFailed(TaskStoreError):
    """The task list of a project could not be retrieved."""


class UpdateFailed(TaskStoreError):
    """A task update was not accepted by the store."""
