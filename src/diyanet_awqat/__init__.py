"""Diyanet Awqat Salah API client with automatic bearer-token refresh."""

from .acquirer import TokenAcquirer
from .client import Client
from .config import DEFAULT_BASE_URL, DEFAULT_EARLY_EXPIRY, Config
from .config_loader import load_config
from .envelope import Result
from .errors import APIError, DecodeError, DiyanetError, HTTPStatusError, TransportError
from .models import City, CityDetail, Country, DailyContent, PrayerTime, State
from .token import Token
from .token_access import get_access_token, get_token
from .token_source import ReuseTokenSource
from .transport import BearerAuth, new_session

__all__ = [
    "APIError",
    "BearerAuth",
    "City",
    "CityDetail",
    "Client",
    "Config",
    "Country",
    "DailyContent",
    "DecodeError",
    "DEFAULT_BASE_URL",
    "DEFAULT_EARLY_EXPIRY",
    "DiyanetError",
    "HTTPStatusError",
    "PrayerTime",
    "Result",
    "ReuseTokenSource",
    "State",
    "Token",
    "TokenAcquirer",
    "TransportError",
    "get_access_token",
    "get_token",
    "load_config",
    "new_session",
]
