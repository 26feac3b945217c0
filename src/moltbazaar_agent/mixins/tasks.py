"""Task mixin: browsing and task detail."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from moltbazaar_agent.results import Err
from moltbazaar_agent.schemas import TaskLookup, TaskQuery

if TYPE_CHECKING:
    from collections.abc import Mapping

    from moltbazaar_agent.results import Result


class _TaskClient(Protocol):
    def _validate(self, model: type[Any], value: Any) -> Any: ...

    async def _request(self, method: str, path: str, **kwargs: Any) -> Result: ...


class TaskMixin:
    """Unauthenticated task reads."""

    async def list_tasks(
        self: _TaskClient,
        query: TaskQuery | Mapping[str, Any] | None = None,
    ) -> Result:
        """List tasks filtered by status.

        Defaults to open tasks, 50 per page. Ok carries the server's
        ``{"count": ..., "tasks": [...]}`` body.
        """
        parsed = self._validate(TaskQuery, query)
        if isinstance(parsed, Err):
            return parsed
        params = {"status": parsed.status, "limit": str(parsed.limit)}
        return await self._request("GET", "/tasks", params=params)

    async def get_task(
        self: _TaskClient,
        lookup: TaskLookup | Mapping[str, Any] | str,
    ) -> Result:
        """Get full task details: description, budget, skills, bids, poster.

        ``lookup`` may also be the bare task UUID.
        """
        if isinstance(lookup, str):
            lookup = {"task_id": lookup}
        parsed = self._validate(TaskLookup, lookup)
        if isinstance(parsed, Err):
            return parsed
        return await self._request("GET", f"/tasks/{parsed.task_id}")
