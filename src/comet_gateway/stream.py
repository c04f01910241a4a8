"""Normalization of chat-completion chunks into stream events.

CometAPI sometimes reports failures as an ``error`` object inside a normal
chunk rather than through the transport. Every chunk is therefore decoded
into one of three shapes before any text or usage is extracted:

- :class:`ErrorChunk` -- an in-band error; the stream fails immediately.
- :class:`DeltaChunk` -- a text delta, possibly carrying usage as well.
- :class:`UsageChunk` -- usage only (the final chunk with ``include_usage``).
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Literal, Union

from comet_gateway.errors import PROVIDER_LABEL, in_band_error
from comet_gateway.pricing import CompletionUsage, total_cost

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Output events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextEvent:
    text: str

    @property
    def type(self) -> Literal["text"]:
        return "text"

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class UsageEvent:
    input_tokens: int
    output_tokens: int
    cache_read_tokens: int | None = None
    reasoning_tokens: int | None = None
    total_cost: float = 0.0

    @property
    def type(self) -> Literal["usage"]:
        return "usage"

    def to_dict(self) -> dict[str, Any]:
        """Wire form; optional counters are omitted when absent."""
        out: dict[str, Any] = {
            "type": "usage",
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
        }
        if self.cache_read_tokens is not None:
            out["cacheReadTokens"] = self.cache_read_tokens
        if self.reasoning_tokens is not None:
            out["reasoningTokens"] = self.reasoning_tokens
        out["totalCost"] = self.total_cost
        return out

    @classmethod
    def from_usage(cls, usage: CompletionUsage) -> UsageEvent:
        return cls(
            input_tokens=usage.prompt_tokens or 0,
            output_tokens=usage.completion_tokens or 0,
            cache_read_tokens=usage.cached_tokens,
            reasoning_tokens=usage.reasoning_tokens,
            total_cost=total_cost(usage),
        )


StreamEvent = Union[TextEvent, UsageEvent]


# ---------------------------------------------------------------------------
# Decoded chunks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ErrorChunk:
    code: int | str | None
    message: str | None
    raw: dict[str, Any] | None = None


@dataclass(frozen=True)
class DeltaChunk:
    text: str
    usage: CompletionUsage | None = None


@dataclass(frozen=True)
class UsageChunk:
    usage: CompletionUsage


Chunk = Union[ErrorChunk, DeltaChunk, UsageChunk]


def decode_chunk(raw: Any) -> Chunk:
    """Classify one raw chunk (a dict or an object with attributes)."""
    data = _as_dict(raw)

    if "error" in data:
        err = _as_dict(data.get("error"))
        return ErrorChunk(code=err.get("code"), message=err.get("message"), raw=data)

    usage_raw = data.get("usage")
    usage = CompletionUsage.from_dict(_as_dict(usage_raw)) if usage_raw else None

    choices = data.get("choices") or []
    # Bare ``delta`` chunks (no ``choices`` wrapper) come from some proxies
    first = _as_dict(choices[0]) if choices else data
    delta = _as_dict(first.get("delta"))
    text = delta.get("content") or ""

    if not text and usage is not None:
        return UsageChunk(usage)
    return DeltaChunk(text=text, usage=usage)


def _as_dict(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    if value is None:
        return {}
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return dict(getattr(value, "__dict__", {}))


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


def normalize_stream(chunks: Iterable[Any]) -> Iterator[StreamEvent]:
    """Turn raw chunks into text events followed by at most one usage event.

    Raises on an in-band error chunk without emitting anything further.
    Events already yielded before a failure stay delivered.
    """
    last_usage: CompletionUsage | None = None

    for raw in chunks:
        chunk = decode_chunk(raw)

        if isinstance(chunk, ErrorChunk):
            logger.error("%s Error: %s - %s", PROVIDER_LABEL, chunk.code, chunk.message)
            raise in_band_error(chunk.code, chunk.message, raw=chunk.raw)

        if isinstance(chunk, DeltaChunk):
            if chunk.text:
                yield TextEvent(chunk.text)
            if chunk.usage is not None:
                last_usage = chunk.usage
        else:
            last_usage = chunk.usage

    if last_usage is not None:
        yield UsageEvent.from_usage(last_usage)
