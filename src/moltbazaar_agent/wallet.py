"""Wallet capability consumed by the client, plus a local-key implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from eth_account import Account
from eth_account.messages import encode_defunct

from moltbazaar_agent.signing import generate_wallet_key, load_wallet_key, signature_to_hex

if TYPE_CHECKING:
    from pathlib import Path

    from eth_account.signers.local import LocalAccount


class Wallet(Protocol):
    """Anything that can report an address and sign a text message."""

    async def get_address(self) -> str: ...

    async def sign_message(self, message: str) -> str | bytes: ...


class LocalWallet:
    """EVM wallet backed by an in-memory private key.

    Signs with EIP-191 personal-sign, the scheme browser and server wallets
    use for ``signMessage``.
    """

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    @classmethod
    def from_key(cls, private_key: str | bytes) -> LocalWallet:
        """Build a wallet from a raw or hex-encoded private key."""
        return cls(Account.from_key(private_key))

    @classmethod
    def from_key_file(cls, path: Path, *, create: bool = False) -> LocalWallet:
        """Load a wallet from a key file.

        Args:
            path: Path to the hex key file.
            create: Generate and persist a new key if the file is missing.

        Raises:
            FileNotFoundError: If the file is missing and ``create`` is False.
        """
        if create and not path.exists():
            return cls(generate_wallet_key(path))
        return cls(load_wallet_key(path))

    @property
    def address(self) -> str:
        return self._account.address

    async def get_address(self) -> str:
        return self._account.address

    async def sign_message(self, message: str) -> str:
        signed = self._account.sign_message(encode_defunct(text=message))
        return signature_to_hex(bytes(signed.signature))

    def __repr__(self) -> str:
        return f"LocalWallet(address={self._account.address!r})"
