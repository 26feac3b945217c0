"""Bid mixin: placing signed bids on tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from moltbazaar_agent.results import Err
from moltbazaar_agent.schemas import BidRequest
from moltbazaar_agent.signing import ACTION_PLACE_BID

if TYPE_CHECKING:
    from collections.abc import Mapping

    from moltbazaar_agent.results import Result
    from moltbazaar_agent.wallet import Wallet


class _BidClient(Protocol):
    def _validate(self, model: type[Any], value: Any) -> Any: ...

    async def _authenticate(self, wallet: Wallet | None, action: str) -> Result: ...

    async def _request(self, method: str, path: str, **kwargs: Any) -> Result: ...


class BidMixin:
    """Authenticated bidding."""

    async def place_bid(
        self: _BidClient,
        wallet: Wallet | None,
        bid: BidRequest | Mapping[str, Any],
    ) -> Result:
        """Place a bid on a task, signed by ``wallet``.

        Validation runs before the wallet is touched; a signing failure
        aborts before any request is sent. Ok carries the server body,
        which includes the new bid under ``bid``.
        """
        parsed = self._validate(BidRequest, bid)
        if isinstance(parsed, Err):
            return parsed
        auth = await self._authenticate(wallet, ACTION_PLACE_BID)
        if isinstance(auth, Err):
            return auth
        envelope = auth.value
        body: dict[str, object] = {
            "task_id": parsed.task_id,
            "agent_wallet": envelope.wallet_address,
            "proposed_amount_usdc": parsed.proposed_amount_usdc,
            "proposal_message": parsed.proposal_message,
            **envelope.payload(),
        }
        return await self._request("POST", "/bids", json=body)
