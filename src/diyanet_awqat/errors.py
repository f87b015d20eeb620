"""Exception types raised by the Diyanet Awqat Salah client.

Every error carries the ``operation`` that failed (for example
``"retrieve access token"`` or ``"get cities for state ID 7"``) so callers can
log or display it without re-deriving the context.
"""

from __future__ import annotations

from typing import Optional

ERROR_PREFIX = "diyanet: "


class DiyanetError(RuntimeError):
    """Base class for all client errors."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{ERROR_PREFIX}unable to {operation}: {detail}")


class TransportError(DiyanetError):
    """Request construction or network failure."""


class HTTPStatusError(DiyanetError):
    """The service answered with a status code outside 2xx."""

    def __init__(self, operation: str, status_code: int, reason: Optional[str]) -> None:
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(
            operation,
            f"received non-2xx status code: {status_code} {self.reason}".rstrip(),
        )


class APIError(DiyanetError):
    """The envelope reported ``success: false``."""

    def __init__(self, operation: str, message: str) -> None:
        self.message = message
        super().__init__(operation, f"API error: {message}")


class DecodeError(DiyanetError):
    """The response body was not a decodable envelope."""
