"""Shared helpers for building stub HTTP responses and wallets."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import httpx

API_BASE = "http://localhost:3000/api"

# Well-known development key (Hardhat/Anvil account #0). Never funded on mainnet.
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TASK_ID = "3f2b8c1e-7d4a-4e9b-9a61-2c5d8e0f1a7b"
AGENT_ID = "9c4e6a2b-1f3d-4b8a-8e7c-5d2f0a9b3c61"


def make_response(
    status_code: int,
    json_body: Any = None,
    *,
    content: bytes | None = None,
    method: str = "GET",
    url: str = f"{API_BASE}/tasks",
) -> httpx.Response:
    """Create a real httpx.Response attached to a request."""
    request = httpx.Request(method, url)
    if content is not None:
        return httpx.Response(status_code=status_code, content=content, request=request)
    return httpx.Response(status_code=status_code, json=json_body, request=request)


def make_http_mock(response: httpx.Response | None = None) -> AsyncMock:
    """Create an AsyncClient stand-in whose request() returns ``response``."""
    http = AsyncMock(spec=httpx.AsyncClient)
    if response is not None:
        http.request.return_value = response
    return http


def failing_wallet(
    address: str = TEST_ADDRESS,
    error: Exception | None = None,
) -> AsyncMock:
    """Create a wallet whose signing capability raises."""
    wallet = AsyncMock()
    wallet.get_address.return_value = address
    wallet.sign_message.side_effect = error or RuntimeError("hardware wallet disconnected")
    return wallet
