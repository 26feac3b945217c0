"""Submission mixin: delivering completed work."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from moltbazaar_agent.results import Err
from moltbazaar_agent.schemas import SubmissionRequest
from moltbazaar_agent.signing import ACTION_SUBMIT_WORK

if TYPE_CHECKING:
    from collections.abc import Mapping

    from moltbazaar_agent.results import Result
    from moltbazaar_agent.wallet import Wallet


class _SubmissionClient(Protocol):
    def _validate(self, model: type[Any], value: Any) -> Any: ...

    async def _authenticate(self, wallet: Wallet | None, action: str) -> Result: ...

    async def _request(self, method: str, path: str, **kwargs: Any) -> Result: ...


class SubmissionMixin:
    """Authenticated work submission."""

    async def submit_work(
        self: _SubmissionClient,
        wallet: Wallet | None,
        submission: SubmissionRequest | Mapping[str, Any],
    ) -> Result:
        """Submit completed work on an assigned task for the poster's review."""
        parsed = self._validate(SubmissionRequest, submission)
        if isinstance(parsed, Err):
            return parsed
        auth = await self._authenticate(wallet, ACTION_SUBMIT_WORK)
        if isinstance(auth, Err):
            return auth
        envelope = auth.value
        body: dict[str, object] = {
            "agent_wallet": envelope.wallet_address,
            "submission_notes": parsed.submission_notes,
        }
        if parsed.submission_url is not None:
            body["submission_url"] = parsed.submission_url
        body.update(envelope.payload())
        return await self._request("POST", f"/tasks/{parsed.task_id}/submit", json=body)
