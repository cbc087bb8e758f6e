"""Task store interface and its HTTP implementation."""
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from taskzenith.board.columns import BoardTask
from taskzenith.board.errors import FetchFailed, UpdateFailed
from taskzenith.config import settings

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    async def fetch_by_project(self, project_id: str) -> List[BoardTask]:
        """Return the current full task list of a project, in store order."""
        ...

    async def update(self, task_id: str, patch: Mapping[str, Any]) -> BoardTask:
        """Apply a partial update and return the stored record."""
        ...


class HttpTaskStore:
    """Task store backed by the TaskZenith REST API.

    ``fetch_by_project`` maps to ``GET /api/projects/{id}/tasks`` and ``update``
    to ``PATCH /api/tasks/{id}`` with a partial camelCase body. Every failure
    (connection errors, timeouts, non-2xx answers, undecodable bodies) surfaces
    as :class:`FetchFailed` or :class:`UpdateFailed`.

    Pass ``client`` to reuse an existing ``httpx.AsyncClient``; the store then
    leaves closing it to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            token = token if token is not None else settings.TASK_STORE_TOKEN
            headers: Dict[str, str] = {"Accept": "application/json"}
            if token:
                headers["Authorization"] = f"Bearer {token}"
            self._client = httpx.AsyncClient(
                base_url=base_url or settings.TASK_STORE_URL,
                headers=headers,
                timeout=timeout if timeout is not None else settings.TASK_STORE_TIMEOUT,
                transport=transport,
            )
            self._owns_client = True

    async def __aenter__(self) -> "HttpTaskStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_by_project(self, project_id: str) -> List[BoardTask]:
        path = f"/api/projects/{quote(project_id, safe='')}/tasks"
        try:
            resp = await self._client.get(path)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise FetchFailed(
                f"Failed to fetch tasks for project {project_id}", exc.response.status_code
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise FetchFailed(f"Failed to fetch tasks for project {project_id}: {exc}") from exc

        if not isinstance(payload, list):
            raise FetchFailed(f"Unexpected task list payload for project {project_id}")
        try:
            tasks = [BoardTask.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise FetchFailed(f"Malformed task record for project {project_id}: {exc}") from exc

        logger.debug("Fetched %d tasks for project %s", len(tasks), project_id)
        return tasks

    async def update(self, task_id: str, patch: Mapping[str, Any]) -> BoardTask:
        path = f"/api/tasks/{quote(task_id, safe='')}"
        try:
            resp = await self._client.patch(path, json=dict(patch))
            resp.raise_for_status()
            payload = resp.json()
            return BoardTask.model_validate(payload)
        except httpx.HTTPStatusError as exc:
            raise UpdateFailed(f"Failed to update task {task_id}", exc.response.status_code) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpdateFailed(f"Failed to update task {task_id}: {exc}") from exc
