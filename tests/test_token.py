"""Unit tests for the token value and claim decoding."""

import base64
import logging
import time
from datetime import timedelta

import pytest

from conftest import make_jwt
from diyanet_awqat.token import (
    EXPIRED_SENTINEL,
    Token,
    claim_expiry,
    compute_expiry,
    is_admissible,
)

KNOWN_TOKEN = "a.eyJleHAiOjk5OTk5OTk5OTl9.b"


def raw_claims_token(claims_json: str) -> str:
    payload = base64.urlsafe_b64encode(claims_json.encode()).rstrip(b"=").decode()
    return f"header.{payload}.signature"


class TestClaimExpiry:
    """Tests for reading the exp claim out of an access token."""

    def test_reads_exp_claim(self) -> None:
        """The middle segment is decoded as unpadded base64 JSON."""
        assert claim_expiry(KNOWN_TOKEN) == 9999999999

    def test_reads_claim_needing_padding(self) -> None:
        """Payloads whose length is not a multiple of four still decode."""
        assert claim_expiry(make_jwt(1700000000)) == 1700000000

    @pytest.mark.parametrize(
        "access_token",
        [
            "no-delimiter",
            "only.one",
            "a.!!!.b",
            "a.bm90LWpzb24.b",  # "not-json"
            make_jwt(None),
            make_jwt("1700000000"),
            make_jwt(True),
            "a.WzFd.b",  # "[1]"
            "",
            raw_claims_token('{"exp": 1' + "0" * 400 + "}"),
            raw_claims_token('{"exp": 1e999}'),
            raw_claims_token('{"exp": Infinity}'),
            raw_claims_token('{"exp": -Infinity}'),
            raw_claims_token('{"exp": NaN}'),
        ],
    )
    def test_malformed_tokens_yield_expired_sentinel(self, access_token: str, caplog) -> None:
        """Malformed tokens never raise and are logged."""
        with caplog.at_level(logging.WARNING, logger="diyanet-auth"):
            assert claim_expiry(access_token) == EXPIRED_SENTINEL
        assert caplog.records


class TestComputeExpiry:
    """Tests for the early-expiry shift."""

    def test_subtracts_safety_margin(self) -> None:
        expiry = compute_expiry(KNOWN_TOKEN, timedelta(minutes=15))
        assert expiry == 9999999999 - 15 * 60
        assert expiry < 9999999999

    def test_malformed_token_is_already_expired(self) -> None:
        expiry = compute_expiry("garbage", timedelta(minutes=15))
        assert expiry == EXPIRED_SENTINEL
        assert expiry < time.time() - 15 * 60

    @pytest.mark.parametrize("exp", ["1e999", "Infinity", "NaN", "1" + "0" * 400])
    def test_unbounded_exp_is_never_valid(self, exp: str) -> None:
        """Out-of-range or non-finite claims must not yield a token valid forever."""
        expiry = compute_expiry(raw_claims_token('{"exp": ' + exp + "}"), timedelta(minutes=15))

        assert expiry == EXPIRED_SENTINEL
        assert Token(access_token="t", expires_at=expiry).is_valid() is False


class TestIsAdmissible:
    def test_future_token_is_admissible(self, far_future_jwt: str) -> None:
        assert is_admissible(far_future_jwt) is True

    def test_token_at_deadline_is_not_admissible(self) -> None:
        assert is_admissible(make_jwt(int(time.time()) + 5)) is False

    def test_malformed_token_is_not_admissible(self) -> None:
        assert is_admissible("garbage") is False


class TestToken:
    """Tests for the Token dataclass."""

    def test_is_valid_with_future_expiry(self) -> None:
        token = Token(access_token="t", expires_at=time.time() + 3600)
        assert token.is_valid() is True

    def test_is_valid_with_past_expiry(self) -> None:
        token = Token(access_token="t", expires_at=time.time() - 1)
        assert token.is_valid() is False

    def test_is_valid_respects_buffer(self) -> None:
        token = Token(access_token="t", expires_at=time.time() + 30)
        assert token.is_valid(buffer_seconds=60) is False
        assert token.is_valid(buffer_seconds=10) is True

    def test_sentinel_token_is_invalid(self) -> None:
        assert Token(access_token="t", expires_at=EXPIRED_SENTINEL).is_valid() is False

    def test_empty_access_token_is_invalid(self) -> None:
        assert Token(access_token="", expires_at=time.time() + 3600).is_valid() is False

    def test_expires_in_seconds(self) -> None:
        token = Token(access_token="t", expires_at=time.time() + 3600)
        assert 3598 <= token.expires_in_seconds() <= 3600
        assert Token(access_token="t", expires_at=0).expires_in_seconds() == 0

    def test_authorization_header_value(self) -> None:
        token = Token(access_token="abc", expires_at=0)
        assert token.token_type == "Bearer"
        assert token.authorization == "Bearer abc"
