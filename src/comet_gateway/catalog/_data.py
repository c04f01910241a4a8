"""Curated fallback catalog shipped with the adapter."""
from __future__ import annotations

from types import MappingProxyType

from comet_gateway.catalog.types import ModelInfo

DEFAULT_MODEL_ID = "claude-3-5-sonnet-20241022"

# Read-only; resolution always hands out copies.
COMETAPI_MODELS: MappingProxyType[str, ModelInfo] = MappingProxyType(
    {
        "claude-3-5-sonnet-20241022": ModelInfo(
            max_tokens=8192,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=3.0,
            output_price=15.0,
            description="Anthropic's Claude 3.5 Sonnet via CometAPI",
        ),
        "claude-3-5-haiku-20241022": ModelInfo(
            max_tokens=8192,
            context_window=200_000,
            supports_images=True,
            supports_prompt_cache=False,
            input_price=1.0,
            output_price=5.0,
            description="Anthropic's Claude 3.5 Haiku via CometAPI",
        ),
    }
)
