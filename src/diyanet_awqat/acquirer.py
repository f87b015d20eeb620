from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import requests

from .envelope import decode_response
from .errors import DiyanetError, TransportError
from .token import Token, compute_expiry, is_admissible

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger("diyanet-auth")

LOGIN_PATH = "Auth/Login"
REFRESH_PATH = "Auth/RefreshToken/{refresh_token}"

RETRIEVE_OPERATION = "retrieve access token"
REFRESH_OPERATION = "refresh access token"


def _parse_token_payload(data: Any) -> Dict[str, str]:
    if not isinstance(data, dict):
        raise TypeError("token payload is not a JSON object")
    access_token = data.get("accessToken")
    if not access_token:
        raise ValueError("no accessToken returned by the service")
    return {
        "access_token": str(access_token),
        "refresh_token": str(data.get("refreshToken") or ""),
    }


class TokenAcquirer:
    """Logs in to Diyanet Awqat Salah and refreshes the bearer token.

    The refresh token returned with every login/refresh is held here and is
    the only mutable state. Callers that share an acquirer between threads
    must serialise :meth:`acquire` (``ReuseTokenSource`` does).

    A session passed in stays owned by the caller. Without one the acquirer
    creates its own, released by :meth:`close`.
    """

    def __init__(self, config: "Config", *, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    @property
    def has_refresh_token(self) -> bool:
        return bool(self._refresh_token)

    def _url(self, path: str) -> str:
        return self._config.base_url.rstrip("/") + "/" + path

    def acquire(self) -> Token:
        """Return a fresh token, preferring a refresh over a full login."""

        if self._refresh_token:
            try:
                return self._refresh()
            except DiyanetError as exc:
                logger.warning("Refresh failed, falling back to login: %s", exc)
                self._refresh_token = None
        return self._login()

    def _refresh(self) -> Token:
        headers: Dict[str, str] = {}
        if self._access_token and is_admissible(self._access_token):
            headers["Authorization"] = f"Bearer {self._access_token}"
        url = self._url(REFRESH_PATH.format(refresh_token=self._refresh_token))
        return self._request_access_token("GET", url, REFRESH_OPERATION, headers=headers)

    def _login(self) -> Token:
        body = {"email": self._config.email, "password": self._config.password}
        return self._request_access_token(
            "POST",
            self._url(LOGIN_PATH),
            RETRIEVE_OPERATION,
            headers={"Content-Type": "application/json"},
            json=body,
        )

    def _request_access_token(
        self,
        method: str,
        url: str,
        operation: str,
        *,
        headers: Dict[str, str],
        json: Optional[Dict[str, str]] = None,
    ) -> Token:
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                json=json,
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(operation, f"failed to make token request: {exc}") from exc

        payload = decode_response(response, operation, _parse_token_payload)

        token = Token(
            access_token=payload["access_token"],
            expires_at=compute_expiry(payload["access_token"], self._config.early_expiry),
        )

        # Only replace state once the whole response has been handled.
        self._access_token = payload["access_token"]
        self._refresh_token = payload["refresh_token"] or None
        logger.info("Access token obtained (%s)", operation)
        return token
