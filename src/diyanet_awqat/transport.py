"""requests integration that signs every outgoing request with a bearer token."""

from __future__ import annotations

from typing import Optional

import requests
from requests.auth import AuthBase

from .token_source import ReuseTokenSource

USER_AGENT = "diyanet-awqat-client"


class BearerAuth(AuthBase):
    """Attach ``Authorization: Bearer <token>`` using a token source."""

    def __init__(self, source: ReuseTokenSource) -> None:
        self._source = source

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        token = self._source.token()
        request.headers["Authorization"] = token.authorization
        return request


def new_session(
    source: ReuseTokenSource,
    *,
    session: Optional[requests.Session] = None,
) -> requests.Session:
    """Return a session whose requests are all authenticated through ``source``."""

    session = session or requests.Session()
    session.auth = BearerAuth(source)
    session.headers["User-Agent"] = USER_AGENT
    session.headers["Accept"] = "application/json"
    return session
