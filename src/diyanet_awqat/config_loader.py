"""Helpers for loading the client configuration with env-manager.

The functions here always build a fresh ConfigManager so that a password
rotated in Secret Manager is picked up the next time a config is loaded.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Optional

from .config import DEFAULT_BASE_URL, DEFAULT_EARLY_EXPIRY, Config
from .client import DEFAULT_TIMEOUT

try:
    from env_manager import ConfigManager
except ImportError:  # installed with the "config" extra
    ConfigManager = None

DEFAULT_CONFIG_PATH = "config/config_vars.yaml"


def build_config_manager(
    *,
    config_path: str = DEFAULT_CONFIG_PATH,
    secret_origin: Optional[str] = None,
    gcp_project_id: Optional[str] = None,
    auto_load: bool = True,
    debug: bool = False,
) -> Any:
    """Build a new ConfigManager instance with the provided options."""

    if ConfigManager is None:
        raise ImportError(
            "env-manager is required to load configuration files. "
            "Install it with: pip install 'diyanet-awqat-client[config]'"
        )
    return ConfigManager(
        config_path,
        secret_origin=secret_origin,
        gcp_project_id=gcp_project_id,
        auto_load=auto_load,
        debug=debug,
    )


def load_config(
    *,
    config_path: str = DEFAULT_CONFIG_PATH,
    secret_origin: Optional[str] = None,
    gcp_project_id: Optional[str] = None,
) -> Config:
    """Read the Diyanet credentials and tunables into a :class:`Config`."""

    manager = build_config_manager(
        config_path=config_path,
        secret_origin=secret_origin,
        gcp_project_id=gcp_project_id,
        auto_load=True,
    )
    early_expiry_seconds = manager.get(
        "DIYANET_EARLY_EXPIRY_SECONDS", int(DEFAULT_EARLY_EXPIRY.total_seconds())
    )
    return Config(
        email=manager.require("DIYANET_EMAIL"),
        password=manager.require("DIYANET_PASSWORD"),
        base_url=manager.get("DIYANET_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        early_expiry=timedelta(seconds=int(early_expiry_seconds)),
        timeout=float(manager.get("DIYANET_TIMEOUT_SECONDS", DEFAULT_TIMEOUT)),
    )
