"""Identity and tunables for talking to the Diyanet Awqat Salah service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

import requests

from .acquirer import TokenAcquirer
from .client import DEFAULT_TIMEOUT, Client
from .token import Token
from .token_source import ReuseTokenSource
from .transport import new_session

DEFAULT_BASE_URL = "https://awqatsalah.diyanet.gov.tr/"
# Tokens are treated as stale this long before their claimed expiry.
DEFAULT_EARLY_EXPIRY = timedelta(minutes=15)


@dataclass(frozen=True)
class Config:
    """Configuration for the Diyanet Awqat Salah service.

    Attributes:
        email: Account email used to log in.
        password: Account password used to log in.
        base_url: Service root; paths such as ``Auth/Login`` are appended.
        early_expiry: Safety margin subtracted from the token's ``exp`` claim.
        timeout: Per-request timeout in seconds for every HTTP call.
    """

    email: str
    password: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    early_expiry: timedelta = DEFAULT_EARLY_EXPIRY
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.email or not self.password:
            raise ValueError("email and password are required to authenticate")
        if self.early_expiry < timedelta(0):
            raise ValueError("early_expiry must not be negative")

    def token_source(self, session: Optional[requests.Session] = None) -> ReuseTokenSource:
        """Return a source that hands out the same token until it goes stale.

        ``session`` is used for the login and refresh calls only.
        """
        return ReuseTokenSource(TokenAcquirer(self, session=session))

    def token(self, session: Optional[requests.Session] = None) -> Token:
        """Log in once and return the resulting token.

        A caller-supplied ``session`` is left open; otherwise a session is
        created for the call and closed before returning.
        """
        if session is not None:
            return self.token_source(session).token()
        with requests.Session() as owned:
            return self.token_source(owned).token()

    def http_session(self, session: Optional[requests.Session] = None) -> requests.Session:
        """Return a session that attaches a valid bearer token to every request.

        The returned session's ``auth`` must not be replaced.
        """
        return new_session(self.token_source(), session=session)

    def new_client(self, session: Optional[requests.Session] = None) -> Client:
        return Client(self.http_session(session), base_url=self.base_url, timeout=self.timeout)
