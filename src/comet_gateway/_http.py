"""HTTP clients around httpx that map failures into comet_gateway exceptions."""
from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

import httpx

from comet_gateway._sse import iter_sse_data
from comet_gateway.config import COMPLETION_TIMEOUT
from comet_gateway.errors import (
    NetworkError,
    ProviderError,
    RequestTimeoutError,
    StreamError,
    error_from_status_code,
)

logger = logging.getLogger(__name__)

JSON = dict[str, Any]
RequestOptions = dict[str, Any]


def _translate_error(response: httpx.Response) -> ProviderError:
    """Build an error from a non-2xx response whose body has been read."""
    raw_text = response.text
    try:
        body = response.json()
    except ValueError:
        body = None

    message = raw_text or response.reason_phrase
    error_code = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        err = body["error"]
        message = err.get("message") or message
        code = err.get("type") or err.get("code")
        error_code = str(code) if code is not None else None

    return error_from_status_code(
        response.status_code,
        message,
        error_code=error_code,
        raw=body if isinstance(body, dict) else None,
    )


class HttpClient:
    """Minimal JSON client used for catalog lookups."""

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers or {},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def get_json(self, path: str, *, timeout: float | None = None) -> Any:
        """Send a GET request and return the decoded JSON body.

        Raises a comet_gateway error on non-2xx status, transport failure or
        an undecodable body.
        """
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            resp = self._client.get(path, **kwargs)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Request timed out: {exc}", cause=exc) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"Network error: {exc}", cause=exc) from exc

        if not resp.is_success:
            raise _translate_error(resp)

        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderError(
                f"Invalid JSON from {path}: {exc}", status_code=resp.status_code, cause=exc
            ) from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ChatCompletionsClient:
    """OpenAI-compatible ``/chat/completions`` client.

    ``create`` mirrors the OpenAI SDK call shape: a single params dict, a
    parsed body back for ``stream=False`` and an iterator of chunk dicts for
    ``stream=True``. Exactly one HTTP request is made per call.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        default_headers: dict[str, str] | None = None,
        timeout: float = COMPLETION_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        headers.update(default_headers or {})
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._client.headers)

    def create(
        self, params: JSON, options: RequestOptions | None = None
    ) -> JSON | Iterator[JSON]:
        """Send a chat-completion request.

        *options* may carry per-request ``headers`` and ``timeout``.
        """
        options = options or {}
        request = self._client.build_request(
            "POST",
            "/chat/completions",
            json=params,
            headers=options.get("headers"),
            timeout=options.get("timeout", httpx.USE_CLIENT_DEFAULT),
        )
        stream = bool(params.get("stream"))

        try:
            response = self._client.send(request, stream=stream)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Request timed out: {exc}", cause=exc) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"Network error: {exc}", cause=exc) from exc

        if not stream:
            if not response.is_success:
                raise _translate_error(response)
            try:
                body = response.json()
            except ValueError as exc:
                raise ProviderError(
                    f"Invalid JSON in completion response: {exc}",
                    status_code=response.status_code,
                    cause=exc,
                ) from exc
            if not isinstance(body, dict):
                raise ProviderError(
                    "Completion response is not a JSON object",
                    status_code=response.status_code,
                )
            return body

        if not response.is_success:
            try:
                response.read()
            finally:
                response.close()
            raise _translate_error(response)

        return self._iter_chunks(response)

    def _iter_chunks(self, response: httpx.Response) -> Iterator[JSON]:
        """Decode SSE ``data:`` payloads into chunk dicts, closing *response* when done."""
        try:
            for payload in iter_sse_data(response.iter_lines()):
                try:
                    chunk = json.loads(payload)
                except json.JSONDecodeError as exc:
                    raise StreamError(f"Malformed stream chunk: {payload[:200]!r}", cause=exc) from exc
                if not isinstance(chunk, dict):
                    logger.debug("Skipping non-object stream payload: %r", chunk)
                    continue
                yield chunk
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Stream timed out: {exc}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Network error during stream: {exc}", cause=exc) from exc
        finally:
            response.close()

    def close(self) -> None:
        self._client.close()
