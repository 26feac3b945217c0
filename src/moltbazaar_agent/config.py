"""
Configuration loading for the MoltBazaar agent client.

Settings come from a YAML file validated by pydantic models. Unknown keys
are rejected so typos fail at startup instead of being silently ignored.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from moltbazaar_agent.client import MOLTBAZAAR_API_BASE
from moltbazaar_agent.network import Network

CONFIG_ENV_VAR = "MOLTBAZAAR_CONFIG_PATH"
DEFAULT_CONFIG_FILENAME = "config.yaml"


class MarketplaceConfig(BaseModel):
    """Remote API location."""

    model_config = ConfigDict(extra="forbid")

    api_base_url: str = MOLTBAZAAR_API_BASE


class NetworkConfig(BaseModel):
    """The network the marketplace contracts are deployed on."""

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)

    protocol_family: str = "evm"
    chain_id: str = "8453"
    network_id: str | None = "base-mainnet"

    def to_network(self) -> Network:
        return Network(
            protocol_family=self.protocol_family,
            chain_id=self.chain_id,
            network_id=self.network_id,
        )


class WalletConfig(BaseModel):
    """Location of the agent's wallet key file."""

    model_config = ConfigDict(extra="forbid")

    key_path: str
    create_if_missing: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"
    directory: str | None = None


class Settings(BaseModel):
    """Root configuration container."""

    model_config = ConfigDict(extra="forbid")

    marketplace: MarketplaceConfig
    network: NetworkConfig
    wallet: WalletConfig
    logging: LoggingConfig


def get_config_path(
    env_var_name: str = CONFIG_ENV_VAR,
    default_filename: str = DEFAULT_CONFIG_FILENAME,
) -> Path:
    """Determine the configuration file path.

    Uses ``env_var_name`` if set, otherwise ``default_filename`` at the
    project root.
    """
    override = os.environ.get(env_var_name)
    if override:
        return Path(override).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / default_filename


def load_settings(config_path: Path | None = None) -> Settings:
    """Load and validate settings from a YAML file.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file does not contain a YAML mapping.
        pydantic.ValidationError: If the mapping does not match Settings.
    """
    if config_path is None:
        config_path = get_config_path()

    raw = yaml.safe_load(config_path.read_text())
    if not isinstance(raw, dict):
        msg = f"Invalid config file: {config_path}"
        raise ValueError(msg)
    return Settings(**raw)


def resolve_path(value: str, config_path: Path) -> Path:
    """Resolve a config-relative path against the config file's directory."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = config_path.parent / path
    return path.resolve()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings loaded from the default config path."""
    return load_settings(get_config_path())


def clear_settings_cache() -> None:
    """Forget cached settings so the next ``get_settings`` reloads."""
    get_settings.cache_clear()
