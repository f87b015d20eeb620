"""Shared fixtures: canned HTTP responses and a recording transport adapter."""

from __future__ import annotations

import base64
import json
import time
from http import HTTPStatus
from typing import Any, Callable, List, Optional, Union

import pytest
import requests
from requests.adapters import BaseAdapter

from diyanet_awqat import Config

BASE_URL = "https://awqat.example.test/"


def make_jwt(exp: Any) -> str:
    """Build an unsigned three-part token whose payload carries ``exp``."""
    payload = base64.urlsafe_b64encode(json.dumps({"exp": exp}).encode()).rstrip(b"=")
    return f"header.{payload.decode()}.signature"


def make_response(
    status_code: int = 200,
    payload: Any = None,
    *,
    body: Optional[bytes] = None,
    reason: Optional[str] = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason if reason is not None else HTTPStatus(status_code).phrase
    response._content = body if body is not None else json.dumps(payload).encode()
    response.headers["Content-Type"] = "application/json"
    return response


def envelope(data: Any = None, success: bool = True, message: str = "") -> dict:
    return {"data": data, "success": success, "message": message}


def token_response(access_token: str, refresh_token: str = "r1") -> requests.Response:
    return make_response(
        200, envelope({"accessToken": access_token, "refreshToken": refresh_token})
    )


Reply = Union[requests.Response, Exception, Callable[[requests.PreparedRequest], requests.Response]]


class RecordingAdapter(BaseAdapter):
    """Transport adapter that records requests and replays queued replies."""

    def __init__(self, replies: Optional[List[Reply]] = None) -> None:
        super().__init__()
        self.replies: List[Reply] = list(replies or [])
        self.requests: List[requests.PreparedRequest] = []

    def queue(self, *replies: Reply) -> None:
        self.replies.extend(replies)

    def send(self, request, **kwargs):  # noqa: D401 - requests adapter API
        self.requests.append(request)
        if not self.replies:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(request)
        reply.request = request
        reply.url = request.url
        return reply

    def close(self) -> None:
        pass


def session_with(adapter: RecordingAdapter) -> requests.Session:
    session = requests.Session()
    session.mount("https://", adapter)
    return session


@pytest.fixture
def config() -> Config:
    return Config(email="user@example.com", password="secret", base_url=BASE_URL)


@pytest.fixture
def far_future_jwt() -> str:
    return make_jwt(int(time.time()) + 24 * 3600)


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()
