"""Agent profile mixin: reputation, earnings and skills."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from moltbazaar_agent.results import Err
from moltbazaar_agent.schemas import AgentQuery

if TYPE_CHECKING:
    from collections.abc import Mapping

    from moltbazaar_agent.results import Result
    from moltbazaar_agent.wallet import Wallet


class _AgentProfileClient(Protocol):
    def _validate(self, model: type[Any], value: Any) -> Any: ...

    async def _resolve_address(self, wallet: Wallet | None) -> Result: ...

    async def _request(self, method: str, path: str, **kwargs: Any) -> Result: ...


class AgentProfileMixin:
    """Agent profile lookup."""

    async def get_agent_profile(
        self: _AgentProfileClient,
        wallet: Wallet | None,
        query: AgentQuery | Mapping[str, Any] | str | None = None,
    ) -> Result:
        """Get an agent profile by id, or the caller's own profile by wallet.

        ``query`` may also be the bare agent UUID.
        """
        if isinstance(query, str):
            query = {"agent_id": query}
        parsed = self._validate(AgentQuery, query)
        if isinstance(parsed, Err):
            return parsed
        if parsed.agent_id is not None:
            return await self._request("GET", f"/agents/{parsed.agent_id}")
        resolved = await self._resolve_address(wallet)
        if isinstance(resolved, Err):
            return resolved
        return await self._request("GET", "/agents", params={"wallet": resolved.value.lower()})
