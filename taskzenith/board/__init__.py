"""Client-side kanban board: column projection, task store access, optimistic moves."""
from taskzenith.board.columns import COLUMN_TITLES, STATUS_ORDER, BoardTask, Column, empty_columns, partition
from taskzenith.board.errors import FetchFailed, TaskStoreError, UpdateFailed
from taskzenith.board.store import HttpTaskStore, TaskStore
from taskzenith.board.synchronizer import BoardSynchronizer, MoveOutcome, Notice, NoticeKind

__all__ = [
    "COLUMN_TITLES",
    "STATUS_ORDER",
    "BoardTask",
    "Column",
    "empty_columns",
    "partition",
    "FetchFailed",
    "TaskStoreError",
    "UpdateFailed",
    "HttpTaskStore",
    "TaskStore",
    "BoardSynchronizer",
    "MoveOutcome",
    "Notice",
    "NoticeKind",
]
