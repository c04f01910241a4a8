"""Tests for comet_gateway.errors."""
from __future__ import annotations

import json

import pytest

from comet_gateway.errors import (
    AuthenticationError,
    ConfigurationError,
    InBandProviderError,
    InBandRateLimitError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
    SDKError,
    ServerError,
    StreamError,
    error_from_status_code,
    in_band_error,
    make_error_readable,
)


def _throttle_raw(details: list[dict]) -> dict:
    """Upstream error payload with nested retry details, as CometAPI relays it."""
    return {"error": {"metadata": {"raw": json.dumps({"error": {"details": details}})}}}


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


class TestHierarchy:
    def test_cause(self) -> None:
        orig = ValueError("original")
        assert SDKError("wrapped", cause=orig).cause is orig
        assert SDKError("plain").cause is None

    def test_provider_defaults(self) -> None:
        err = ProviderError("fail")
        assert err.provider == "cometapi"
        assert err.status_code is None
        assert err.error_code is None
        assert err.retryable is False
        assert err.raw is None

    @pytest.mark.parametrize(
        "cls",
        [
            InBandProviderError,
            AuthenticationError,
            NotFoundError,
            InvalidRequestError,
            RateLimitError,
            ServerError,
        ],
    )
    def test_provider_subclasses(self, cls: type) -> None:
        assert issubclass(cls, ProviderError)

    @pytest.mark.parametrize(
        "cls", [RequestTimeoutError, NetworkError, StreamError, ConfigurationError]
    )
    def test_non_provider_errors(self, cls: type) -> None:
        assert issubclass(cls, SDKError)
        assert not issubclass(cls, ProviderError)

    def test_rate_limit_retryable_by_default(self) -> None:
        assert RateLimitError("slow down").retryable is True
        assert RateLimitError("slow down", retryable=False).retryable is False

    def test_in_band_rate_limit_is_both(self) -> None:
        err = InBandRateLimitError("slow down")
        assert isinstance(err, RateLimitError)
        assert isinstance(err, InBandProviderError)


# ---------------------------------------------------------------------------
# error_from_status_code
# ---------------------------------------------------------------------------


class TestErrorFromStatusCode:
    @pytest.mark.parametrize(
        ("status", "cls"),
        [
            (400, InvalidRequestError),
            (422, InvalidRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (429, RateLimitError),
            (418, RateLimitError),
            (500, ServerError),
            (503, ServerError),
            (409, ProviderError),
        ],
    )
    def test_mapping(self, status: int, cls: type) -> None:
        err = error_from_status_code(status, "msg")
        assert type(err) is cls
        assert err.status_code == status

    def test_fields_carried(self) -> None:
        err = error_from_status_code(401, "bad key", error_code="invalid_api_key", raw={"a": 1})
        assert str(err) == "bad key"
        assert err.error_code == "invalid_api_key"
        assert err.raw == {"a": 1}


# ---------------------------------------------------------------------------
# make_error_readable
# ---------------------------------------------------------------------------


class TestMakeErrorReadable:
    def test_generic_error(self) -> None:
        assert make_error_readable(ValueError("boom")) == "CometAPI Error: boom"

    def test_provider_error_without_throttle(self) -> None:
        err = ServerError("upstream exploded", status_code=502)
        assert make_error_readable(err) == "CometAPI Error: upstream exploded"

    def test_empty_message_uses_type_name(self) -> None:
        assert make_error_readable(RuntimeError()) == "CometAPI Error: RuntimeError"

    @pytest.mark.parametrize("status", [429, 418])
    def test_retry_delay_hint(self, status: int) -> None:
        err = RateLimitError(
            "Too many requests",
            status_code=status,
            raw=_throttle_raw([{"@type": "QuotaFailure"}, {"retryDelay": "30s"}]),
        )
        assert make_error_readable(err) == "Rate limit exceeded, try again in 30s."

    def test_retry_delay_in_already_parsed_payload(self) -> None:
        raw = {"error": {"metadata": {"raw": {"error": {"details": [{"retryDelay": "7s"}]}}}}}
        err = RateLimitError("Too many requests", status_code=429, raw=raw)
        assert make_error_readable(err) == "Rate limit exceeded, try again in 7s."

    def test_rate_limit_without_hint(self) -> None:
        err = RateLimitError("Too many requests", status_code=429)
        assert make_error_readable(err) == "Rate limit exceeded, try again later.\nToo many requests"

    @pytest.mark.parametrize(
        "raw",
        [
            {"error": {"metadata": {"raw": "not json"}}},
            {"error": {"metadata": {"raw": json.dumps({"error": {"details": "nope"}})}}},
            {"error": {"metadata": {"raw": json.dumps([1, 2])}}},
            {"error": "flat"},
            _throttle_raw([{"retryDelay": ""}]),
        ],
    )
    def test_unparsable_payload_falls_back(self, raw: dict) -> None:
        err = RateLimitError("Too many requests", status_code=429, raw=raw)
        assert make_error_readable(err).startswith("Rate limit exceeded, try again later.")

    def test_code_attribute_is_consulted(self) -> None:
        class WireError(Exception):
            code = "429"

        assert make_error_readable(WireError("slow")).startswith("Rate limit exceeded")


# ---------------------------------------------------------------------------
# in_band_error
# ---------------------------------------------------------------------------


class TestInBandError:
    def test_message_format(self) -> None:
        err = in_band_error(500, "Internal server error")
        assert type(err) is InBandProviderError
        assert str(err) == "CometAPI Error 500: Internal server error"
        assert err.status_code == 500

    def test_string_code(self) -> None:
        err = in_band_error("model_not_found", "no such model")
        assert str(err) == "CometAPI Error model_not_found: no such model"
        assert err.status_code is None

    def test_missing_fields(self) -> None:
        assert str(in_band_error(None, None)) == "CometAPI Error None: None"

    def test_throttle_is_humanized(self) -> None:
        raw = _throttle_raw([{"retryDelay": "12s"}])
        err = in_band_error(429, "quota", raw=raw)
        assert isinstance(err, InBandRateLimitError)
        assert str(err) == "CometAPI Error 429: Rate limit exceeded, try again in 12s."
        assert err.status_code == 429
        assert str(err.cause) == "quota"

    def test_throttle_without_hint(self) -> None:
        err = in_band_error("418", "teapot quota")
        assert str(err) == "CometAPI Error 418: Rate limit exceeded, try again later.\nteapot quota"
