import asyncio
import os
from typing import Any, Dict, List, Mapping, Tuple

# Keep the application engine off the developer's database file
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import taskzenith.models  # noqa: F401  (registers the tables on Base.metadata)
from taskzenith.board import BoardTask, FetchFailed, UpdateFailed
from taskzenith.database import Base, get_db

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api_app(db_session):
    from taskzenith.main import app

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


def make_task(task_id: str, status: str, title: str = None, project_id: str = "p1") -> Dict[str, Any]:
    return {
        "id": task_id,
        "title": title or f"Task {task_id}",
        "description": None,
        "status": status,
        "priority": "medium",
        "assignees": [],
        "projectId": project_id,
        "dueDate": None,
        "createdAt": "2024-05-01T09:00:00",
        "updatedAt": "2024-05-01T09:00:00",
        "comments": [],
    }


class MemoryTaskStore:
    """Answers immediately; updates fail for the ids listed in ``fail_updates``."""

    def __init__(self, records: List[Dict[str, Any]]):
        self.records = {record["id"]: dict(record) for record in records}
        self.order = [record["id"] for record in records]
        self.fail_updates = set()
        self.fail_fetch = False
        self.fetch_calls: List[str] = []
        self.update_calls: List[Tuple[str, Dict[str, Any]]] = []

    async def fetch_by_project(self, project_id: str) -> List[BoardTask]:
        self.fetch_calls.append(project_id)
        if self.fail_fetch:
            raise FetchFailed("store unavailable", 503)
        return [
            BoardTask.model_validate(self.records[task_id])
            for task_id in self.order
            if self.records[task_id]["projectId"] == project_id
        ]

    async def update(self, task_id: str, patch: Mapping[str, Any]) -> BoardTask:
        self.update_calls.append((task_id, dict(patch)))
        if task_id in self.fail_updates:
            raise UpdateFailed(f"Failed to update task {task_id}", 500)
        record = self.records[task_id]
        record.update(patch)
        record["updatedAt"] = "2024-05-02T10:30:00"
        return BoardTask.model_validate(record)


class ControlledTaskStore:
    """Every call parks on a future the test resolves explicitly."""

    def __init__(self):
        self.fetches: List[Tuple[str, asyncio.Future]] = []
        self.updates: List[Tuple[str, Dict[str, Any], asyncio.Future]] = []

    async def fetch_by_project(self, project_id: str) -> List[BoardTask]:
        future = asyncio.get_running_loop().create_future()
        self.fetches.append((project_id, future))
        return await future

    async def update(self, task_id: str, patch: Mapping[str, Any]) -> BoardTask:
        future = asyncio.get_running_loop().create_future()
        self.updates.append((task_id, dict(patch), future))
        return await future


@pytest.fixture
def memory_store():
    return MemoryTaskStore(
        [
            make_task("t1", "todo", "Design schema"),
            make_task("t2", "todo", "Write endpoints"),
            make_task("t3", "backlog", "Plan sprint"),
            make_task("t4", "done", "Set up repo"),
        ]
    )


@pytest.fixture
def controlled_store():
    return ControlledTaskStore()


@pytest.fixture
def record():
    return make_task


@pytest.fixture
def memory_store_factory():
    return MemoryTaskStore
