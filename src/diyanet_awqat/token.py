"""Bearer token value and access-token claim decoding."""

from __future__ import annotations

import base64
import binascii
import json
import logging
import math
import time
from dataclasses import dataclass
from datetime import timedelta

logger = logging.getLogger("diyanet-auth")

# Far enough in the past to be stale under any early-expiry margin.
EXPIRED_SENTINEL = 0.0
# An old access token still needs this much life left to authorise a refresh.
ADMISSIBLE_LEEWAY = 10


@dataclass(frozen=True)
class Token:
    """Bearer token handed out by the token source.

    Attributes:
        access_token: The value sent in the Authorization header.
        expires_at: Unix timestamp after which the token must not be reused.
            Already shifted earlier than the server-side expiry.
        token_type: Always ``"Bearer"`` for this service.
    """

    access_token: str
    expires_at: float
    token_type: str = "Bearer"

    def is_valid(self, buffer_seconds: int = ADMISSIBLE_LEEWAY) -> bool:
        """Check if token is still usable with a small safety buffer."""
        return bool(self.access_token) and time.time() < self.expires_at - buffer_seconds

    def expires_in_seconds(self) -> int:
        return max(0, int(self.expires_at - time.time()))

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.access_token}"


def claim_expiry(access_token: str) -> float:
    """Return the ``exp`` claim of a dot-delimited access token.

    Malformed tokens are logged and yield :data:`EXPIRED_SENTINEL`.
    """

    parts = access_token.split(".")
    if len(parts) < 3:
        logger.warning("Invalid access token format")
        return EXPIRED_SENTINEL

    payload = parts[1]
    try:
        decoded = base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4))
        claims = json.loads(decoded)
    except (binascii.Error, ValueError) as exc:
        logger.warning("Failed to decode access token payload: %s", exc)
        return EXPIRED_SENTINEL

    exp = claims.get("exp") if isinstance(claims, dict) else None
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        logger.warning("Access token claims carry no numeric exp field")
        return EXPIRED_SENTINEL
    try:
        exp = float(exp)
    except OverflowError:
        logger.warning("Access token exp claim is out of range")
        return EXPIRED_SENTINEL
    if not math.isfinite(exp):
        logger.warning("Access token exp claim is not finite")
        return EXPIRED_SENTINEL
    return exp


def compute_expiry(access_token: str, early_expiry: timedelta) -> float:
    """Shift the claimed expiry earlier by ``early_expiry``."""

    exp = claim_expiry(access_token)
    if exp == EXPIRED_SENTINEL:
        return EXPIRED_SENTINEL
    return exp - early_expiry.total_seconds()


def is_admissible(access_token: str) -> bool:
    """Whether the server would still accept this token as a bearer."""

    return claim_expiry(access_token) - ADMISSIBLE_LEEWAY > time.time()
