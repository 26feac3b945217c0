"""Tagged operation results: ``Ok(payload)`` or ``Err(kind, detail)``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories an operation can report."""

    VALIDATION = "validation"
    REMOTE_REJECTION = "remote_rejection"
    TRANSPORT = "transport"
    SIGNING = "signing"


@dataclass(frozen=True)
class Ok:
    """Successful outcome carrying the parsed server response."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome.

    ``status_code`` is only set for remote rejections.
    """

    kind: ErrorKind
    detail: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return False


Result = Ok | Err
