"""Derivation of request parameters from model metadata and user settings."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal

from comet_gateway.catalog.types import ModelInfo

ApiFormat = Literal["openai", "anthropic"]

ANTHROPIC_DEFAULT_MAX_TOKENS = 8192
DEFAULT_TEMPERATURE: dict[str, float] = {"openai": 0.0, "anthropic": 0.0}

# Output is capped at this share of the context window unless the user
# sets an explicit limit.
MAX_OUTPUT_SHARE = 0.2


@dataclass(frozen=True)
class ModelParams:
    max_tokens: int | None
    temperature: float


def get_model_params(
    *,
    format: ApiFormat,
    model_id: str,
    model: ModelInfo,
    settings: Any = None,
) -> ModelParams:
    """Compute ``max_tokens`` and ``temperature`` for a request.

    *settings* is any object with optional ``model_max_tokens`` and
    ``model_temperature`` attributes (usually :class:`HandlerOptions`).
    """
    user_max_tokens = getattr(settings, "model_max_tokens", None)
    user_temperature = getattr(settings, "model_temperature", None)

    if user_max_tokens and user_max_tokens > 0:
        max_tokens: int | None = user_max_tokens
    elif model.max_tokens > 0:
        max_tokens = min(model.max_tokens, math.ceil(model.context_window * MAX_OUTPUT_SHARE))
    elif format == "anthropic" or "claude" in model_id.lower():
        max_tokens = ANTHROPIC_DEFAULT_MAX_TOKENS
    else:
        max_tokens = None

    temperature = (
        float(user_temperature) if user_temperature is not None else DEFAULT_TEMPERATURE[format]
    )
    return ModelParams(max_tokens=max_tokens, temperature=temperature)
