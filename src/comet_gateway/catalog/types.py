"""Model catalog types."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class ModelInfo:
    """Capabilities and pricing of one model served by the gateway.

    Construction validates the shape, so a ``ModelInfo`` that exists is
    always well-formed.
    """

    context_window: int
    """Max input + output tokens."""

    max_tokens: int = 0
    """Max output tokens the adapter will request (0 means unspecified)."""

    supports_images: bool = False
    """Whether the model accepts image inputs."""

    supports_prompt_cache: bool = False
    """Always false for CometAPI today."""

    input_price: float | None = None
    """Currency units per million input tokens, ``None`` when unknown."""

    output_price: float | None = None
    """Currency units per million output tokens, ``None`` when unknown."""

    description: str = ""
    """Human-readable label."""

    def __post_init__(self) -> None:
        if isinstance(self.context_window, bool) or not isinstance(self.context_window, int):
            raise ValueError(f"context_window must be an int, got {self.context_window!r}")
        if self.context_window <= 0:
            raise ValueError(f"context_window must be positive, got {self.context_window}")
        if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
            raise ValueError(f"max_tokens must be an int, got {self.max_tokens!r}")
        if self.max_tokens < 0:
            raise ValueError(f"max_tokens must be non-negative, got {self.max_tokens}")
        for name in ("input_price", "output_price"):
            price = getattr(self, name)
            if price is None:
                continue
            if isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0:
                raise ValueError(f"{name} must be a non-negative number, got {price!r}")
        if not isinstance(self.description, str):
            raise ValueError(f"description must be a string, got {self.description!r}")


ModelCatalog = dict[str, ModelInfo]


class DegradeReason(StrEnum):
    """Why a catalog resolution fell back to the static table."""

    NO_API_KEY = "no_api_key"
    TRANSPORT = "transport"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class CatalogResult:
    """Outcome of a catalog fetch before it is collapsed to a plain mapping."""

    models: ModelCatalog
    degraded: DegradeReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.degraded is None
