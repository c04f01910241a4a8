"""Adapter settings, default request headers and timeouts."""
from __future__ import annotations

import os
from dataclasses import dataclass

from comet_gateway.errors import ConfigurationError

VERSION = "0.1.0"

DEFAULT_BASE_URL = "https://api.cometapi.com/v1"
CATALOG_TIMEOUT = 10.0  # seconds
COMPLETION_TIMEOUT = 600.0

DEFAULT_HEADERS: dict[str, str] = {
    "HTTP-Referer": "https://pypi.org/project/comet-gateway/",
    "X-Title": "comet-gateway",
    "X-Comet-Gateway-Version": VERSION,
    "User-Agent": f"comet-gateway/{VERSION}",
}


@dataclass(frozen=True)
class HandlerOptions:
    api_key: str | None = None
    base_url: str | None = None
    model_id: str | None = None
    model_max_tokens: int | None = None
    model_temperature: float | None = None

    def __post_init__(self) -> None:
        if self.model_max_tokens is not None and self.model_max_tokens < 0:
            raise ConfigurationError(
                f"model_max_tokens must be non-negative, got {self.model_max_tokens}"
            )
        if self.model_temperature is not None and not 0 <= self.model_temperature <= 2:
            raise ConfigurationError(
                f"model_temperature must be between 0 and 2, got {self.model_temperature}"
            )

    @property
    def resolved_base_url(self) -> str:
        return (self.base_url or DEFAULT_BASE_URL).rstrip("/")

    @classmethod
    def from_env(cls, **overrides: object) -> HandlerOptions:
        """Read COMETAPI_API_KEY, COMETAPI_BASE_URL and COMETAPI_MODEL_ID.

        Keyword overrides that are not ``None`` win over the environment.
        """
        values: dict[str, object] = {
            "api_key": os.environ.get("COMETAPI_API_KEY") or None,
            "base_url": os.environ.get("COMETAPI_BASE_URL") or None,
            "model_id": os.environ.get("COMETAPI_MODEL_ID") or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
