"""Error hierarchy for the CometAPI gateway adapter."""
from __future__ import annotations

import json
from typing import Any

PROVIDER_LABEL = "CometAPI"

# Status codes that CometAPI uses for throttling.
RATE_LIMIT_CODES = (429, 418)


class SDKError(Exception):
    """Base error for all comet_gateway errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProviderError(SDKError):
    """Error originating from the CometAPI gateway."""

    def __init__(
        self,
        message: str,
        *,
        provider: str = "cometapi",
        status_code: int | None = None,
        error_code: str | None = None,
        retryable: bool = False,
        raw: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code
        self.retryable = retryable
        self.raw = raw


# ---------------------------------------------------------------------------
# Specific provider errors
# ---------------------------------------------------------------------------


class InBandProviderError(ProviderError):
    """Failure reported inside an otherwise successful response or stream chunk."""


class AuthenticationError(ProviderError):
    """Authentication failed (e.g. invalid API key)."""


class NotFoundError(ProviderError):
    """Resource not found (e.g. unknown model)."""


class InvalidRequestError(ProviderError):
    """The request was malformed or invalid."""


class RateLimitError(ProviderError):
    """Rate limit exceeded.

    Marked retryable for callers that keep their own policy; this package
    never retries.
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class InBandRateLimitError(RateLimitError, InBandProviderError):
    """Throttling reported inside a response or stream chunk."""


class ServerError(ProviderError):
    """Server-side error from the gateway."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


# ---------------------------------------------------------------------------
# Non-provider errors
# ---------------------------------------------------------------------------


class RequestTimeoutError(SDKError):
    """A request timed out."""


class NetworkError(SDKError):
    """A network-level error occurred."""


class StreamError(SDKError):
    """An error occurred while decoding a stream."""


class ConfigurationError(SDKError):
    """Invalid adapter configuration."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def error_from_status_code(
    status_code: int,
    message: str,
    *,
    error_code: str | None = None,
    raw: dict[str, Any] | None = None,
) -> ProviderError:
    """Map an HTTP status code to the appropriate error type."""
    common = dict(status_code=status_code, error_code=error_code, raw=raw)

    if status_code in (400, 422):
        return InvalidRequestError(message, **common)
    if status_code in (401, 403):
        return AuthenticationError(message, **common)
    if status_code == 404:
        return NotFoundError(message, **common)
    if status_code in RATE_LIMIT_CODES:
        return RateLimitError(message, **common)
    if 500 <= status_code <= 599:
        return ServerError(message, **common)
    return ProviderError(message, **common)


def in_band_error(
    code: int | str | None, message: str | None, raw: dict[str, Any] | None = None
) -> ProviderError:
    """Build the error raised for an ``error`` object delivered as payload.

    The message always starts with the gateway's code. Throttling codes are
    followed by the humanized rate-limit text, everything else by the
    gateway's message verbatim.
    """
    status = _as_status(code)
    if status in RATE_LIMIT_CODES:
        original = InBandRateLimitError(message or "", status_code=status, raw=raw)
        return InBandRateLimitError(
            f"{PROVIDER_LABEL} Error {code}: {make_error_readable(original)}",
            status_code=status,
            raw=raw,
            cause=original,
        )
    return InBandProviderError(
        f"{PROVIDER_LABEL} Error {code}: {message}",
        status_code=status,
        raw=raw,
    )


def make_error_readable(error: BaseException) -> str:
    """Turn a caught error into a message fit for the end user.

    Never raises: a payload that cannot be parsed falls back to the generic
    rate-limit text.
    """
    message = str(error) or type(error).__name__
    status = _as_status(getattr(error, "status_code", None))
    if status is None:
        status = _as_status(getattr(error, "code", None))

    if status not in RATE_LIMIT_CODES:
        return f"{PROVIDER_LABEL} Error: {message}"

    retry_delay = _retry_delay_hint(getattr(error, "raw", None))
    if retry_delay:
        return f"Rate limit exceeded, try again in {retry_delay}."
    return f"Rate limit exceeded, try again later.\n{message}"


def _retry_delay_hint(raw: Any) -> str | None:
    """Dig ``error.details[].retryDelay`` out of the upstream payload."""
    try:
        nested = raw["error"]["metadata"]["raw"]
        parsed = json.loads(nested) if isinstance(nested, str) else nested
        delays = [d.get("retryDelay") for d in parsed["error"]["details"]]
    except (KeyError, TypeError, ValueError, AttributeError):
        return None
    return next((str(d) for d in delays if d), None)


def _as_status(code: Any) -> int | None:
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, str) and code.isdigit():
        return int(code)
    return None
