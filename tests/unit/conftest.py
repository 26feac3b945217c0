"""Unit test fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import yaml

from moltbazaar_agent.client import MarketplaceClient
from moltbazaar_agent.config import clear_settings_cache
from moltbazaar_agent.wallet import LocalWallet
from tests.helpers import API_BASE, TEST_PRIVATE_KEY, make_http_mock

if TYPE_CHECKING:
    from unittest.mock import AsyncMock


@pytest.fixture()
def http_mock() -> AsyncMock:
    """AsyncClient stand-in; also counts outbound requests."""
    return make_http_mock()


@pytest.fixture()
def client(http_mock: AsyncMock) -> MarketplaceClient:
    """Client pointed at a local API root with stubbed HTTP."""
    return MarketplaceClient(api_base_url=API_BASE, http_client=http_mock)


@pytest.fixture()
def wallet() -> LocalWallet:
    return LocalWallet.from_key(TEST_PRIVATE_KEY)


@pytest.fixture()
def tmp_key_path(tmp_path: Path) -> Path:
    return tmp_path / "keys" / "agent.key"


@pytest.fixture()
def sample_config(tmp_path: Path) -> Path:
    """Write a config.yaml under tmp_path and return its path."""
    config: dict[str, Any] = {
        "marketplace": {"api_base_url": API_BASE},
        "network": {"protocol_family": "evm", "chain_id": "84532", "network_id": "base-sepolia"},
        "wallet": {"key_path": "keys/agent.key", "create_if_missing": True},
        "logging": {"level": "WARNING", "directory": None},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(config))
    return config_path


@pytest.fixture(autouse=True)
def _clear_config_cache() -> None:
    """Clear config cache between tests."""
    clear_settings_cache()


@pytest.fixture()
def reset_client_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("moltbazaar_agent")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
