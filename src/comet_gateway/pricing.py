"""Price parsing and usage/cost normalization."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

TOKENS_PER_PRICE_UNIT = 1_000_000


def parse_api_price(price: Any) -> float | None:
    """Convert a per-token price string from the gateway to a per-million price.

    Returns ``None`` for missing, empty, negative or unparsable values.
    """
    if price is None or isinstance(price, bool) or price == "":
        return None
    try:
        value = float(price)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value * TOKENS_PER_PRICE_UNIT


@dataclass(frozen=True)
class CompletionUsage:
    """Usage block of an OpenAI-compatible response, with OpenRouter-style cost fields."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None
    cached_tokens: int | None = None
    reasoning_tokens: int | None = None
    cost: float | None = None
    upstream_inference_cost: float | None = None
    is_byok: bool | None = None
    raw: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompletionUsage:
        prompt_details = data.get("prompt_tokens_details") or {}
        completion_details = data.get("completion_tokens_details") or {}
        cost_details = data.get("cost_details") or {}
        return cls(
            prompt_tokens=data.get("prompt_tokens"),
            completion_tokens=data.get("completion_tokens"),
            total_tokens=data.get("total_tokens"),
            cached_tokens=prompt_details.get("cached_tokens"),
            reasoning_tokens=completion_details.get("reasoning_tokens"),
            cost=data.get("cost"),
            upstream_inference_cost=cost_details.get("upstream_inference_cost"),
            is_byok=data.get("is_byok"),
            raw=data,
        )


def total_cost(usage: CompletionUsage) -> float:
    """Gateway cost plus upstream inference cost, absent parts counting as zero."""
    return (usage.upstream_inference_cost or 0) + (usage.cost or 0)
