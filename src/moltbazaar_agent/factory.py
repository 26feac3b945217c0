"""ClientFactory: builds clients, wallets and action providers from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from moltbazaar_agent.actions import MoltBazaarActionProvider
from moltbazaar_agent.client import MarketplaceClient
from moltbazaar_agent.config import get_config_path, load_settings, resolve_path
from moltbazaar_agent.wallet import LocalWallet

if TYPE_CHECKING:
    from pathlib import Path

    from moltbazaar_agent.config import Settings


class ClientFactory:
    """Factory that wires configuration, wallet key and client together.

    Callers never deal with key paths; they ask for a provider and get one
    with the wallet already loaded.

    Args:
        config_path: Path to config.yaml. If None, resolved via the
            MOLTBAZAAR_CONFIG_PATH env var or the project root.
        key_path: Override for the wallet key file. If None, resolved
            from config.yaml's wallet.key_path.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        key_path: Path | None = None,
    ) -> None:
        if config_path is None:
            config_path = get_config_path()
        self._config_path = config_path
        self.settings: Settings = load_settings(config_path)

        if key_path is not None:
            self._key_path = key_path.resolve()
        else:
            self._key_path = resolve_path(self.settings.wallet.key_path, config_path)

    @property
    def key_path(self) -> Path:
        return self._key_path

    def create_client(self) -> MarketplaceClient:
        """Create a client for the configured API and network."""
        return MarketplaceClient(
            api_base_url=self.settings.marketplace.api_base_url,
            network=self.settings.network.to_network(),
        )

    def load_wallet(self) -> LocalWallet:
        """Load the agent wallet, generating a key if configured to.

        Raises:
            FileNotFoundError: If the key file is missing and
                wallet.create_if_missing is false.
            ValueError: If the key file is malformed.
        """
        return LocalWallet.from_key_file(
            self._key_path,
            create=self.settings.wallet.create_if_missing,
        )

    def create_action_provider(self) -> MoltBazaarActionProvider:
        """Create an action provider bound to a new client and the agent wallet."""
        wallet = self.load_wallet()
        return MoltBazaarActionProvider(self.create_client(), wallet=wallet)

    def __repr__(self) -> str:
        return f"ClientFactory(config_path={str(self._config_path)!r})"
