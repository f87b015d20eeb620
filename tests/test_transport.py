"""Tests for the bearer-token requests integration."""

import time
from unittest import mock

import pytest
import requests

from conftest import RecordingAdapter, envelope, make_response, session_with
from diyanet_awqat import APIError, BearerAuth, ReuseTokenSource, Token, new_session


@pytest.fixture
def source() -> mock.Mock:
    source = mock.Mock(spec=ReuseTokenSource)
    source.token.return_value = Token(access_token="abc", expires_at=time.time() + 3600)
    return source


class TestBearerAuth:
    def test_sets_authorization_header(self, source) -> None:
        request = requests.Request("GET", "https://awqat.example.test/api/DailyContent").prepare()

        BearerAuth(source)(request)

        assert request.headers["Authorization"] == "Bearer abc"
        source.token.assert_called_once_with()

    def test_token_errors_propagate(self, source) -> None:
        source.token.side_effect = APIError("retrieve access token", "invalid credentials")
        request = requests.Request("GET", "https://awqat.example.test/").prepare()

        with pytest.raises(APIError, match="invalid credentials"):
            BearerAuth(source)(request)


class TestNewSession:
    def test_every_request_is_signed(self, source) -> None:
        """Each outgoing request asks the token source first."""
        adapter = RecordingAdapter([make_response(200, envelope([])), make_response(200, envelope([]))])
        session = new_session(source, session=session_with(adapter))

        session.get("https://awqat.example.test/api/Place/Countries")
        session.get("https://awqat.example.test/api/Place/States")

        assert source.token.call_count == 2
        assert all(r.headers["Authorization"] == "Bearer abc" for r in adapter.requests)
        assert all(r.headers["Accept"] == "application/json" for r in adapter.requests)

    def test_creates_session_when_none_given(self, source) -> None:
        session = new_session(source)

        assert isinstance(session, requests.Session)
        assert isinstance(session.auth, BearerAuth)
        assert session.headers["User-Agent"] == "diyanet-awqat-client"
