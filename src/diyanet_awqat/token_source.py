"""Reuse a token until it goes stale, acquiring a new one at most once at a time."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .acquirer import TokenAcquirer
from .token import Token

logger = logging.getLogger("diyanet-auth")


class ReuseTokenSource:
    """Caches the latest token handed out by a :class:`TokenAcquirer`.

    A still-valid cached token is returned without taking the lock. Cache
    misses are serialised so concurrent callers wait for one login/refresh
    and then reuse its result.
    """

    def __init__(self, acquirer: TokenAcquirer, token: Optional[Token] = None) -> None:
        self._acquirer = acquirer
        self._token = token
        self._lock = threading.Lock()

    def token(self) -> Token:
        cached = self._token
        if cached is not None and cached.is_valid():
            return cached

        with self._lock:
            cached = self._token
            if cached is not None and cached.is_valid():
                return cached

            if cached is None:
                logger.debug("No cached token, acquiring one")
            else:
                logger.debug("Cached token is stale, acquiring a new one")
            token = self._acquirer.acquire()
            self._token = token
            return token

    def invalidate(self) -> None:
        """Drop the cached token so the next call acquires a new one."""
        with self._lock:
            self._token = None
