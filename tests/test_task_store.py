import json

import httpx
import pytest
from httpx import ASGITransport

from taskzenith.board import BoardSynchronizer, FetchFailed, HttpTaskStore, MoveOutcome, UpdateFailed
from taskzenith.models import Profile, Project, Task, TaskPriority, TaskStatus


def _mock_store(handler, **kwargs) -> HttpTaskStore:
    return HttpTaskStore("http://store.test", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_fetch_parses_task_list(record):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/projects/p1/tasks"
        return httpx.Response(200, json=[record("t1", "todo"), record("t2", "done")])

    async with _mock_store(handler) as store:
        tasks = await store.fetch_by_project("p1")

    assert [(task.id, task.status) for task in tasks] == [("t1", "todo"), ("t2", "done")]
    assert tasks[0].model_dump()["title"] == "Task t1"


@pytest.mark.asyncio
async def test_fetch_error_status_raises_fetch_failed():
    async with _mock_store(lambda request: httpx.Response(500, json={"detail": "boom"})) as store:
        with pytest.raises(FetchFailed) as exc:
            await store.fetch_by_project("p1")

    assert exc.value.status_code == 500
    assert "HTTP 500" in str(exc.value)


@pytest.mark.asyncio
async def test_fetch_transport_error_raises_fetch_failed():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _mock_store(handler) as store:
        with pytest.raises(FetchFailed) as exc:
            await store.fetch_by_project("p1")

    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_fetch_rejects_unexpected_payloads():
    async with _mock_store(lambda request: httpx.Response(200, json={"tasks": []})) as store:
        with pytest.raises(FetchFailed):
            await store.fetch_by_project("p1")

    async with _mock_store(lambda request: httpx.Response(200, json=[{"title": "no id"}])) as store:
        with pytest.raises(FetchFailed):
            await store.fetch_by_project("p1")

    async with _mock_store(lambda request: httpx.Response(200, content=b"<html>")) as store:
        with pytest.raises(FetchFailed):
            await store.fetch_by_project("p1")


@pytest.mark.asyncio
async def test_update_sends_partial_patch_with_token(record):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=record("t1", "done"))

    async with _mock_store(handler, token="secret-token") as store:
        updated = await store.update("t1", {"status": "done"})

    assert seen == {
        "method": "PATCH",
        "path": "/api/tasks/t1",
        "body": {"status": "done"},
        "auth": "Bearer secret-token",
    }
    assert updated.status == "done"


@pytest.mark.asyncio
async def test_update_error_raises_update_failed():
    async with _mock_store(lambda request: httpx.Response(404, json={"detail": "Task not found"})) as store:
        with pytest.raises(UpdateFailed) as exc:
            await store.update("missing", {"status": "done"})

    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_borrowed_client_is_left_open():
    client = httpx.AsyncClient(base_url="http://store.test", transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
    store = HttpTaskStore(client=client)
    await store.aclose()

    assert client.is_closed is False
    assert await store.fetch_by_project("p1") == []
    await client.aclose()


def _seed_board(db_session):
    project = Project(name="Launch")
    db_session.add(project)
    db_session.flush()
    ada = Profile(name="Ada")
    db_session.add(ada)
    tasks = [
        Task(title="Draft copy", status=TaskStatus.TODO, priority=TaskPriority.HIGH, project_id=project.id, position=1),
        Task(title="Pick domain", status=TaskStatus.TODO, priority=TaskPriority.LOW, project_id=project.id, position=2),
        Task(title="Brainstorm", status=TaskStatus.BACKLOG, priority=TaskPriority.MEDIUM, project_id=project.id, position=3),
    ]
    tasks[0].assignees = [ada]
    db_session.add_all(tasks)
    db_session.commit()
    return project.id, [task.id for task in tasks]


@pytest.mark.asyncio
async def test_board_round_trip_against_api(api_app, db_session):
    project_id, (draft, pick, brainstorm) = _seed_board(db_session)

    async with HttpTaskStore("http://test", transport=ASGITransport(app=api_app)) as store:
        board = BoardSynchronizer(store)
        assert await board.load(project_id) is True
        assert board.task_ids_by_column()["todo"] == [draft, pick]
        assert board.select_task(draft).model_dump()["assignees"][0]["name"] == "Ada"
        project_ref = board.select_task(pick).model_dump()["project"]
        assert project_ref == {"id": project_id, "name": "Launch", "color": "#6366f1"}

        assert await board.move_task(pick, "in-progress") is MoveOutcome.COMMITTED
        # The committed record replaces the loaded one without losing fields
        assert board.select_task(pick).model_dump()["project"] == project_ref

        # The server keeps everything but the status, and lists the card where the board put it
        reloaded = BoardSynchronizer(store)
        await reloaded.load(project_id)
        assert reloaded.task_ids_by_column() == board.task_ids_by_column()
        moved = reloaded.select_task(pick).model_dump()
        assert moved["title"] == "Pick domain"
        assert moved["priority"] == "low"

    db_session.expire_all()
    assert db_session.get(Task, pick).status == TaskStatus.IN_PROGRESS
    assert db_session.get(Task, brainstorm).status == TaskStatus.BACKLOG


@pytest.mark.asyncio
async def test_board_reverts_when_task_vanished_on_server(api_app, db_session):
    project_id, (draft, _, _) = _seed_board(db_session)
    notices = []

    async with HttpTaskStore("http://test", transport=ASGITransport(app=api_app)) as store:
        board = BoardSynchronizer(store, on_notice=notices.append)
        await board.load(project_id)
        before = board.snapshot()

        db_session.delete(db_session.get(Task, draft))
        db_session.commit()

        assert await board.move_task(draft, "done") is MoveOutcome.REVERTED

    assert board.columns == before
    assert notices[0].error.status_code == 404


@pytest.mark.asyncio
async def test_load_of_unknown_project_reports_not_found(api_app, db_session):
    notices = []
    async with HttpTaskStore("http://test", transport=ASGITransport(app=api_app)) as store:
        board = BoardSynchronizer(store, on_notice=notices.append)
        assert await board.load("no-such-project") is False

    assert notices[0].error.status_code == 404
    assert board.tasks() == []
