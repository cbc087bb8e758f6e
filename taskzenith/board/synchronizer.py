"""Kanban board synchronizer.

Holds the column projection of one project's tasks, applies drag-and-drop moves
optimistically, persists them through a task store and rolls the board back
when persistence fails.

All board mutations run synchronously between awaits on the event loop, so a
reader never observes a half-applied move or a partially rebuilt board.
"""
import asyncio
import copy
import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from taskzenith.board.columns import (
    COLUMN_TITLES,
    BoardTask,
    Columns,
    empty_columns,
    locate,
    partition,
)
from taskzenith.board.errors import TaskStoreError
from taskzenith.board.store import TaskStore

logger = logging.getLogger(__name__)


class MoveOutcome(str, enum.Enum):
    COMMITTED = "committed"
    REVERTED = "reverted"
    # unknown task id, or dropped onto the column it already sits in
    IGNORED = "ignored"
    # a newer load replaced the board while the update was in flight
    SUPERSEDED = "superseded"


class NoticeKind(str, enum.Enum):
    FETCH_FAILED = "fetch_failed"
    UPDATE_FAILED = "update_failed"


@dataclass(frozen=True)
class Notice:
    """User-facing report of a failed load or move."""

    kind: NoticeKind
    title: str
    description: str
    error: Optional[Exception] = None


class _MoveState(str, enum.Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass
class _Move:
    task_id: str
    target_status: str
    label: str
    # Board as it stood right before this move, given every earlier move that has not failed
    snapshot: Columns
    state: _MoveState = _MoveState.PENDING
    record: Optional[BoardTask] = None


class BoardSynchronizer:
    """Client-side owner of a project's kanban board.

    Moves are applied optimistically in the order they are received. Updates for
    the same task are sent to the store one at a time, in that same order. When
    an update fails, the board returns to the snapshot taken right before that
    move and every later move that has not failed is replayed on top of it, so a
    failure never undoes a move that committed after it.
    """

    def __init__(self, store: TaskStore, on_notice: Optional[Callable[[Notice], None]] = None):
        self._store = store
        self._on_notice = on_notice
        self.columns: Columns = empty_columns()
        self.loading = False
        self.project_id: Optional[str] = None
        self.dropped_task_ids: List[str] = []
        self._load_seq = 0
        self._generation = 0
        self._journal: List[_Move] = []
        self._task_locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    # -------------------- queries --------------------
    def select_task(self, task_id: str) -> Optional[BoardTask]:
        found = locate(self.columns, task_id)
        if found is None:
            return None
        column, index = found
        return column.tasks[index]

    def tasks(self) -> List[BoardTask]:
        return [task for column in self.columns.values() for task in column.tasks]

    def task_ids_by_column(self) -> Dict[str, List[str]]:
        return {status: [task.id for task in column.tasks] for status, column in self.columns.items()}

    def snapshot(self) -> Columns:
        return copy.deepcopy(self.columns)

    @property
    def pending_moves(self) -> int:
        return sum(1 for move in self._journal if move.state is _MoveState.PENDING)

    # -------------------- load --------------------
    async def load(self, project_id: str) -> bool:
        """Fetch the project's tasks and rebuild the board.

        Returns ``True`` when this call's result was applied. A result that
        arrives after a newer ``load`` was started is discarded, whether it is a
        task list or an error.
        """
        self._load_seq += 1
        seq = self._load_seq
        self.loading = True
        try:
            tasks = await self._store.fetch_by_project(project_id)
        except TaskStoreError as exc:
            if seq != self._load_seq:
                logger.debug("Ignoring failure of superseded load #%d for project %s", seq, project_id)
                return False
            self.loading = False
            logger.warning("Loading board for project %s failed: %s", project_id, exc)
            self._notify(
                Notice(
                    kind=NoticeKind.FETCH_FAILED,
                    title="Could not load tasks",
                    description="The board could not be refreshed. Showing the last loaded state.",
                    error=exc,
                )
            )
            return False

        if seq != self._load_seq:
            logger.debug("Discarding stale result of load #%d for project %s", seq, project_id)
            return False

        columns, dropped = partition(tasks)
        if dropped:
            logger.warning(
                "Dropped %d task(s) with unrecognized status from project %s: %s",
                len(dropped),
                project_id,
                ", ".join(dropped),
            )
        self.columns = columns
        self.dropped_task_ids = dropped
        self.project_id = project_id
        self._generation += 1
        self._journal.clear()
        self.loading = False
        logger.info("Loaded %d task(s) for project %s", len(tasks) - len(dropped), project_id)
        return True

    # -------------------- move --------------------
    async def move_task(self, task_id: str, target_status: str) -> MoveOutcome:
        """Move a task to another column, optimistically.

        Raises ``ValueError`` for a status that has no column; nothing is touched
        in that case. Store failures never propagate: they roll the board back,
        emit a notice and return ``MoveOutcome.REVERTED``.
        """
        if target_status not in COLUMN_TITLES:
            raise ValueError(f"Unknown task status: {target_status!r}")

        move = self._apply_optimistic(task_id, target_status)
        if move is None:
            return MoveOutcome.IGNORED

        generation = self._generation
        lock = self._acquire_task_lock(task_id)
        try:
            async with lock:
                updated = await self._store.update(task_id, {"status": target_status})
        except TaskStoreError as exc:
            return self._rollback(move, generation, exc)
        except BaseException:
            # Cancelled or a non-store error: restore the board, then propagate
            self._rollback(move, generation, None)
            raise
        finally:
            self._release_task_lock(task_id)
        return self._commit(move, generation, updated)

    def _apply_optimistic(self, task_id: str, target_status: str) -> Optional[_Move]:
        found = locate(self.columns, task_id)
        if found is None:
            logger.debug("Move of unknown task %s ignored", task_id)
            return None
        column, index = found
        if column.id == target_status:
            return None

        move = _Move(
            task_id=task_id,
            target_status=target_status,
            label=column.tasks[index].label,
            snapshot=self.snapshot(),
        )
        _move_within(self.columns, task_id, target_status)
        self._journal.append(move)
        return move

    def _commit(self, move: _Move, generation: int, updated: BoardTask) -> MoveOutcome:
        if generation != self._generation:
            logger.debug("Task %s committed after the board was reloaded", move.task_id)
            return MoveOutcome.SUPERSEDED

        move.state = _MoveState.COMMITTED
        if updated.id == move.task_id and updated.status == move.target_status:
            move.record = updated
            later = self._later_moves(move)
            if not any(m.task_id == move.task_id and m.state is not _MoveState.FAILED for m in later):
                _replace_record(self.columns, updated)
            for other in later:
                _replace_record(other.snapshot, updated)
        else:
            logger.warning(
                "Store answered move of task %s to %s with record %s in %s; keeping local copy",
                move.task_id,
                move.target_status,
                updated.id,
                updated.status,
            )
        self._trim_journal()
        return MoveOutcome.COMMITTED

    def _rollback(self, move: _Move, generation: int, error: Optional[TaskStoreError]) -> MoveOutcome:
        if generation != self._generation:
            outcome = MoveOutcome.SUPERSEDED
        else:
            move.state = _MoveState.FAILED
            columns = copy.deepcopy(move.snapshot)
            for later in self._later_moves(move):
                if later.state is _MoveState.FAILED:
                    continue
                later.snapshot = copy.deepcopy(columns)
                _move_within(columns, later.task_id, later.target_status)
                if later.record is not None:
                    _replace_record(columns, later.record)
            self.columns = columns
            self._trim_journal()
            outcome = MoveOutcome.REVERTED

        if error is not None:
            logger.warning("Moving task %s to %s failed: %s", move.task_id, move.target_status, error)
            self._notify(
                Notice(
                    kind=NoticeKind.UPDATE_FAILED,
                    title="Could not move task",
                    description=(
                        f"'{move.label}' could not be moved to {COLUMN_TITLES[move.target_status]}. "
                        "The change was reverted."
                    ),
                    error=error,
                )
            )
        return outcome

    def _later_moves(self, move: _Move) -> List[_Move]:
        for index, candidate in enumerate(self._journal):
            if candidate is move:
                return self._journal[index + 1:]
        return []

    def _trim_journal(self) -> None:
        while self._journal and self._journal[0].state is not _MoveState.PENDING:
            self._journal.pop(0)

    # -------------------- per-task ordering --------------------
    def _acquire_task_lock(self, task_id: str) -> asyncio.Lock:
        lock = self._task_locks.get(task_id)
        if lock is None:
            lock = self._task_locks[task_id] = asyncio.Lock()
        self._lock_users[task_id] = self._lock_users.get(task_id, 0) + 1
        return lock

    def _release_task_lock(self, task_id: str) -> None:
        remaining = self._lock_users[task_id] - 1
        if remaining:
            self._lock_users[task_id] = remaining
        else:
            del self._lock_users[task_id]
            del self._task_locks[task_id]

    def _notify(self, notice: Notice) -> None:
        if self._on_notice is None:
            return
        try:
            self._on_notice(notice)
        except Exception:
            logger.exception("Notice handler failed for %s", notice.kind.value)


def _move_within(columns: Columns, task_id: str, target_status: str) -> bool:
    """Detach a task from its column and append it to ``target_status``."""
    found = locate(columns, task_id)
    if found is None:
        return False
    column, index = found
    if column.id == target_status:
        return False
    task = column.tasks.pop(index)
    task.status = target_status
    columns[target_status].tasks.append(task)
    return True


def _replace_record(columns: Columns, updated: BoardTask) -> bool:
    """Swap in the store's copy of a task, in place, if it sits in the matching column."""
    column = columns.get(updated.status)
    if column is None:
        return False
    for index, task in enumerate(column.tasks):
        if task.id == updated.id:
            column.tasks[index] = updated
            return True
    return False
