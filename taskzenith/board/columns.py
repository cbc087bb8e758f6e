"""Board columns and the client-side task record.

The board holds exactly four columns, in workflow order. Their keys are the
task status values, so a task always lives in the column named by its status.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

STATUS_ORDER: Tuple[str, ...] = ("backlog", "todo", "in-progress", "done")
COLUMN_TITLES: Dict[str, str] = {
    "backlog": "Backlog",
    "todo": "To Do",
    "in-progress": "In Progress",
    "done": "Done",
}


class BoardTask(BaseModel):
    """A task as the board sees it.

    Only ``id`` and ``status`` are interpreted. Every other field the store
    sends (title, priority, assignees, comments, ...) is kept verbatim under its
    wire name and handed back untouched.
    """

    id: str
    status: str

    class Config:
        extra = "allow"

    @property
    def label(self) -> str:
        title = (self.model_extra or {}).get("title")
        return str(title) if title else self.id


@dataclass
class Column:
    id: str
    title: str
    tasks: List[BoardTask] = field(default_factory=list)


Columns = Dict[str, Column]


def empty_columns() -> Columns:
    return {status: Column(id=status, title=COLUMN_TITLES[status]) for status in STATUS_ORDER}


def partition(tasks: Iterable[BoardTask]) -> Tuple[Columns, List[str]]:
    """Split a task list into fresh columns, keeping the store's order.

    Returns the columns and the ids of tasks whose status matches no column;
    those tasks are left off the board.
    """
    columns = empty_columns()
    dropped: List[str] = []
    seen = set()
    for task in tasks:
        if task.id in seen:
            continue
        column = columns.get(task.status)
        if column is None:
            dropped.append(task.id)
            continue
        seen.add(task.id)
        column.tasks.append(task)
    return columns, dropped


def locate(columns: Columns, task_id: str) -> Optional[Tuple[Column, int]]:
    for column in columns.values():
        for index, task in enumerate(column.tasks):
            if task.id == task_id:
                return column, index
    return None
