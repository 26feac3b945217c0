"""
Wallet authentication for MoltBazaar write operations.

Write requests carry a plain-text message signed by the agent's wallet
(EIP-191 personal-sign). The server recomputes the message from the
transmitted fields, so its byte layout must match exactly:

    MoltBazaar Authentication
    Action: <action>
    Wallet: <lowercased address>
    Timestamp: <epoch milliseconds>

Also handles wallet key files: a single hex-encoded 32-byte secp256k1
private key per file.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from eth_account import Account
from eth_account.messages import encode_defunct

if TYPE_CHECKING:
    from pathlib import Path

    from eth_account.signers.local import LocalAccount

AUTH_MESSAGE_HEADER = "MoltBazaar Authentication"

ACTION_PLACE_BID = "place_bid"
ACTION_SUBMIT_WORK = "submit_work"


def build_auth_message(action: str, wallet_address: str, timestamp_ms: int) -> str:
    """Build the authentication message for a write action.

    Args:
        action: Action name (``place_bid`` or ``submit_work``).
        wallet_address: Wallet address in any case; always lowercased here.
        timestamp_ms: Epoch milliseconds, captured once per request.

    Returns:
        Newline-separated message without a trailing newline.
    """
    return "\n".join(
        [
            AUTH_MESSAGE_HEADER,
            f"Action: {action}",
            f"Wallet: {wallet_address.lower()}",
            f"Timestamp: {timestamp_ms}",
        ]
    )


def current_timestamp_ms() -> int:
    """Return the current time in epoch milliseconds."""
    return int(time.time() * 1000)


def signature_to_hex(signature: str | bytes) -> str:
    """Normalize a wallet signature to a ``0x``-prefixed hex string."""
    if isinstance(signature, bytes | bytearray):
        return "0x" + bytes(signature).hex()
    return signature


@dataclass(frozen=True)
class AuthEnvelope:
    """One signed authentication message, built fresh for each write call."""

    action: str
    wallet_address: str
    timestamp_ms: int
    message: str
    signature: str

    def payload(self) -> dict[str, object]:
        """Fields merged into the JSON body of the authenticated request."""
        return {
            "signature": self.signature,
            "message": self.message,
            "timestamp": self.timestamp_ms,
        }


def recover_auth_signer(message: str, signature: str | bytes) -> str:
    """Recover the checksummed address that signed ``message``.

    Purely local verification, the same check the marketplace performs.

    Raises:
        ValueError: If the signature is malformed.
    """
    return Account.recover_message(encode_defunct(text=message), signature=signature)


def generate_wallet_key(path: Path) -> LocalAccount:
    """Generate a new wallet key and persist it to ``path``.

    Creates parent directories as needed.

    Returns:
        The new account.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    account = Account.create()
    path.write_text("0x" + bytes(account.key).hex() + "\n")
    return account


def load_wallet_key(path: Path) -> LocalAccount:
    """Load a wallet key from a hex key file.

    Raises:
        FileNotFoundError: If the key file does not exist.
        ValueError: If the file does not contain a 32-byte hex private key.
    """
    text = path.read_text().strip()
    hex_key = text[2:] if text.startswith(("0x", "0X")) else text
    try:
        raw = bytes.fromhex(hex_key)
    except ValueError as exc:
        msg = f"Invalid wallet key file: {path}"
        raise ValueError(msg) from exc
    if len(raw) != 32:
        msg = f"Expected 32-byte private key in {path}, got {len(raw)} bytes"
        raise ValueError(msg)
    return Account.from_key(raw)
