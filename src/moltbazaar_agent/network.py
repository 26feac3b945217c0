"""Network descriptors and the chain-scoping predicate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Network:
    """A blockchain network as reported by the hosting wallet.

    ``chain_id`` is kept as a decimal string (``"8453"``), the way EVM
    wallet providers report it.
    """

    protocol_family: str
    chain_id: str | None = None
    network_id: str | None = None


BASE_MAINNET = Network(protocol_family="evm", chain_id="8453", network_id="base-mainnet")


def is_same_chain(network: Network, supported: Network) -> bool:
    """Return True if ``network`` is on the chain described by ``supported``."""
    return (
        network.protocol_family == supported.protocol_family
        and network.chain_id == supported.chain_id
    )
