"""One-shot helpers to fetch a bearer token.

The configuration is loaded with env-manager on each call so that fresh
credentials are always used.
"""

from __future__ import annotations

from typing import Optional

import requests

from .config import Config
from .config_loader import DEFAULT_CONFIG_PATH, load_config
from .token import Token


def get_token(config: Config, *, session: Optional[requests.Session] = None) -> Token:
    """Log in with ``config`` and return the resulting token."""

    return config.token(session)


def get_access_token(
    *,
    config_path: str = DEFAULT_CONFIG_PATH,
    secret_origin: Optional[str] = None,
    gcp_project_id: Optional[str] = None,
) -> str:
    """Return a freshly acquired access token for the configured account."""

    config = load_config(
        config_path=config_path,
        secret_origin=secret_origin,
        gcp_project_id=gcp_project_id,
    )
    return get_token(config).access_token
