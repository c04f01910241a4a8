"""CometAPI gateway adapter: model catalog resolution and stream normalization."""
from __future__ import annotations

from comet_gateway.config import VERSION as __version__

# Errors
from comet_gateway.errors import (
    SDKError,
    ProviderError,
    InBandProviderError,
    InBandRateLimitError,
    AuthenticationError,
    NotFoundError,
    InvalidRequestError,
    RateLimitError,
    ServerError,
    RequestTimeoutError,
    NetworkError,
    StreamError,
    ConfigurationError,
    error_from_status_code,
    make_error_readable,
)

# Config
from comet_gateway.config import DEFAULT_BASE_URL, DEFAULT_HEADERS, HandlerOptions

# Catalog
from comet_gateway.catalog import (
    COMETAPI_MODELS,
    DEFAULT_MODEL_ID,
    CatalogResult,
    DegradeReason,
    ModelCatalog,
    ModelInfo,
    fetch_catalog,
    resolve_catalog,
)

# Pricing
from comet_gateway.pricing import CompletionUsage, parse_api_price, total_cost

# Streaming
from comet_gateway.stream import (
    DeltaChunk,
    ErrorChunk,
    StreamEvent,
    TextEvent,
    UsageChunk,
    UsageEvent,
    decode_chunk,
    normalize_stream,
)

# Handler
from comet_gateway.adapter import ApiHandler, CreateMessageMetadata, SingleCompletionHandler
from comet_gateway.handler import CometAPIHandler, ResolvedModel
from comet_gateway.model_params import ModelParams, get_model_params
from comet_gateway.transform import convert_to_openai_messages

__all__ = [
    "__version__",
    # Errors
    "SDKError",
    "ProviderError",
    "InBandProviderError",
    "InBandRateLimitError",
    "AuthenticationError",
    "NotFoundError",
    "InvalidRequestError",
    "RateLimitError",
    "ServerError",
    "RequestTimeoutError",
    "NetworkError",
    "StreamError",
    "ConfigurationError",
    "error_from_status_code",
    "make_error_readable",
    # Config
    "DEFAULT_BASE_URL",
    "DEFAULT_HEADERS",
    "HandlerOptions",
    # Catalog
    "COMETAPI_MODELS",
    "DEFAULT_MODEL_ID",
    "CatalogResult",
    "DegradeReason",
    "ModelCatalog",
    "ModelInfo",
    "fetch_catalog",
    "resolve_catalog",
    # Pricing
    "CompletionUsage",
    "parse_api_price",
    "total_cost",
    # Streaming
    "DeltaChunk",
    "ErrorChunk",
    "StreamEvent",
    "TextEvent",
    "UsageChunk",
    "UsageEvent",
    "decode_chunk",
    "normalize_stream",
    # Handler
    "ApiHandler",
    "CreateMessageMetadata",
    "SingleCompletionHandler",
    "CometAPIHandler",
    "ResolvedModel",
    "ModelParams",
    "get_model_params",
    "convert_to_openai_messages",
]
