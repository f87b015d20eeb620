"""Generic ``{success, data, message}`` envelope used by every Diyanet response."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import requests

from .errors import APIError, DecodeError, HTTPStatusError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Decoded response envelope.

    Attributes:
        data: The payload. Only meaningful when ``success`` is true.
        success: Whether the service reported the call as successful.
        message: Diagnostic text from the service, usually empty on success.
    """

    data: Optional[T]
    success: bool
    message: str = ""

    @classmethod
    def from_dict(
        cls,
        payload: Any,
        parse: Optional[Callable[[Any], T]] = None,
        *,
        operation: str,
    ) -> "Result[T]":
        if not isinstance(payload, dict):
            raise DecodeError(operation, "failed to decode response: envelope is not a JSON object")

        success = bool(payload.get("success", False))
        message = payload.get("message") or ""
        data = payload.get("data")
        if success and parse is not None:
            try:
                data = parse(data)
            except (KeyError, TypeError, ValueError) as exc:
                raise DecodeError(operation, f"failed to decode response payload: {exc}") from exc
        return cls(data=data, success=success, message=str(message))


def decode_response(
    response: requests.Response,
    operation: str,
    parse: Optional[Callable[[Any], T]] = None,
) -> T:
    """Check the status, decode the envelope and return its data.

    Raises:
        HTTPStatusError: Non-2xx status without a usable error envelope.
        APIError: The envelope reported ``success: false``.
        DecodeError: The body is not JSON or not an envelope.
    """

    if not 200 <= response.status_code < 300:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and not payload.get("success", False):
            message = payload.get("message")
            if message:
                raise APIError(operation, str(message))
        raise HTTPStatusError(operation, response.status_code, response.reason)

    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodeError(operation, f"failed to decode response: {exc}") from exc

    result: Result[T] = Result.from_dict(payload, parse, operation=operation)
    if not result.success:
        raise APIError(operation, result.message)
    return result.data  # type: ignore[return-value]
