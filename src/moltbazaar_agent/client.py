"""
MarketplaceClient: async client for the MoltBazaar job-marketplace API.

Composes operation mixins for tasks, bids, submissions and agent profiles.
Cross-cutting concerns (input validation, wallet authentication, HTTP and
error mapping) live here. Operations never raise: every outcome is an
``Ok`` or ``Err`` result.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from moltbazaar_agent.mixins import (
    AgentProfileMixin,
    BidMixin,
    SubmissionMixin,
    TaskMixin,
)
from moltbazaar_agent.network import BASE_MAINNET, Network, is_same_chain
from moltbazaar_agent.results import Err, ErrorKind, Ok, Result
from moltbazaar_agent.schemas import describe_validation_error
from moltbazaar_agent.signing import (
    AuthEnvelope,
    build_auth_message,
    current_timestamp_ms,
    signature_to_hex,
)

if TYPE_CHECKING:
    from types import TracebackType

    from moltbazaar_agent.wallet import Wallet

logger = logging.getLogger(__name__)

MOLTBAZAAR_API_BASE = "https://www.moltbazaar.ai/api"

JSON_HEADERS = {"Content-Type": "application/json"}

ModelT = TypeVar("ModelT", bound=BaseModel)


class MarketplaceClient(TaskMixin, BidMixin, SubmissionMixin, AgentProfileMixin):
    """Client for the MoltBazaar REST API.

    Holds only immutable configuration (API base URL, supported network)
    and the underlying HTTP client. Any number of operations may run
    concurrently.

    Usage::

        client = MarketplaceClient()
        result = await client.list_tasks({"status": "open", "limit": 10})
        if result.ok:
            print(result.value["tasks"])
        await client.close()
    """

    def __init__(
        self,
        api_base_url: str = MOLTBAZAAR_API_BASE,
        network: Network = BASE_MAINNET,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_base_url: Marketplace API root, e.g. a staging deployment.
            network: The one network the marketplace is deployed on.
            http_client: Pre-configured HTTP client. One is created if omitted.
        """
        self.api_base_url = api_base_url.rstrip("/")
        self.network = network
        self._http = http_client if http_client is not None else httpx.AsyncClient()

    def supports_network(self, network: Network) -> bool:
        """Return True if the marketplace operates on ``network``."""
        return is_same_chain(network, self.network)

    @staticmethod
    def _validate(
        model: type[ModelT],
        value: ModelT | Mapping[str, Any] | None,
    ) -> ModelT | Err:
        """Coerce raw arguments into ``model``, or a validation Err."""
        if isinstance(value, model):
            return value
        if value is None:
            value = {}
        if not isinstance(value, Mapping):
            detail = f"expected an object of arguments, got {type(value).__name__}"
            logger.debug("Rejected %s input: %s", model.__name__, detail)
            return Err(ErrorKind.VALIDATION, detail)
        try:
            return model.model_validate(dict(value))
        except ValidationError as exc:
            detail = describe_validation_error(exc)
            logger.debug("Rejected %s input: %s", model.__name__, detail)
            return Err(ErrorKind.VALIDATION, detail)

    async def _resolve_address(self, wallet: Wallet | None) -> Result:
        """Ask the wallet for its address."""
        if wallet is None:
            return Err(ErrorKind.SIGNING, "no wallet configured")
        try:
            address = await wallet.get_address()
        except Exception as exc:
            logger.warning("Wallet address lookup failed", extra={"error": repr(exc)})
            return Err(ErrorKind.SIGNING, f"could not resolve wallet address: {exc}")
        if not isinstance(address, str):
            return Err(ErrorKind.SIGNING, f"wallet returned a non-string address: {address!r}")
        return Ok(address)

    async def _authenticate(self, wallet: Wallet | None, action: str) -> Result:
        """Build and sign a fresh AuthEnvelope for ``action``.

        The timestamp is captured once; the transmitted timestamp and the
        signed message always agree.
        """
        resolved = await self._resolve_address(wallet)
        if isinstance(resolved, Err):
            return resolved
        wallet_address = resolved.value.lower()
        timestamp_ms = current_timestamp_ms()
        message = build_auth_message(action, wallet_address, timestamp_ms)
        try:
            signature = await wallet.sign_message(message)
        except Exception as exc:
            logger.warning(
                "Wallet signing failed",
                extra={"action": action, "error": repr(exc)},
            )
            return Err(ErrorKind.SIGNING, f"wallet signing failed: {exc}")
        return Ok(
            AuthEnvelope(
                action=action,
                wallet_address=wallet_address,
                timestamp_ms=timestamp_ms,
                message=message,
                signature=signature_to_hex(signature),
            )
        )

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> Result:
        """Make an HTTP request and map the outcome to a Result.

        Args:
            method: HTTP method (GET, POST).
            path: Path below the API base URL, starting with ``/``.
            **kwargs: Passed to httpx.AsyncClient.request() (``params``, ``json``).

        Returns:
            Ok with the parsed JSON body on 2xx, Err otherwise.
        """
        url = f"{self.api_base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(method, url, headers=JSON_HEADERS, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "Marketplace request failed",
                extra={"method": method, "url": url, "error": repr(exc)},
            )
            return Err(ErrorKind.TRANSPORT, f"{type(exc).__name__}: {exc}")

        if not response.is_success:
            detail = _rejection_message(response)
            logger.warning(
                "Marketplace rejected request",
                extra={
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                    "error": detail,
                },
            )
            return Err(ErrorKind.REMOTE_REJECTION, detail, status_code=response.status_code)

        try:
            return Ok(response.json())
        except ValueError as exc:
            logger.warning(
                "Marketplace returned invalid JSON",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            return Err(ErrorKind.TRANSPORT, f"invalid JSON response: {exc}")

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> MarketplaceClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"MarketplaceClient(api_base_url={self.api_base_url!r})"


def _rejection_message(response: httpx.Response) -> str:
    """Server-reported ``error`` field, else the HTTP reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase or str(response.status_code)
