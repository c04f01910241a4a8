"""Resolution of the model catalog from the gateway with a static fallback."""
from __future__ import annotations

import logging
import math
from collections.abc import Callable

from pydantic import ValidationError

from comet_gateway._http import HttpClient
from comet_gateway.catalog._data import COMETAPI_MODELS
from comet_gateway.catalog._rules import classify_model, is_text_generation_model
from comet_gateway.catalog._schema import CometModelDescriptor, CometModelsResponse
from comet_gateway.catalog.types import CatalogResult, DegradeReason, ModelCatalog, ModelInfo
from comet_gateway.config import CATALOG_TIMEOUT, DEFAULT_BASE_URL
from comet_gateway.errors import SDKError
from comet_gateway.pricing import parse_api_price

logger = logging.getLogger(__name__)

DegradeHook = Callable[[DegradeReason, str], None]


def static_catalog() -> ModelCatalog:
    """Return a fresh copy of the curated table."""
    return dict(COMETAPI_MODELS)


def synthesize_model_info(descriptor: CometModelDescriptor) -> ModelInfo:
    """Build a :class:`ModelInfo` for a descriptor that carries little metadata.

    Raises ``ValueError`` when the descriptor cannot form a valid entry.
    """
    guess = classify_model(descriptor.id)
    max_tokens = descriptor.max_tokens
    if max_tokens is not None and not math.isfinite(max_tokens):
        raise ValueError(f"max_tokens must be finite, got {max_tokens!r}")
    pricing = descriptor.pricing
    return ModelInfo(
        context_window=guess.context_window,
        max_tokens=int(max_tokens) if max_tokens is not None and max_tokens >= 0 else 0,
        supports_images=guess.supports_images,
        # The gateway does not support prompt caching yet
        supports_prompt_cache=False,
        input_price=parse_api_price(pricing.prompt if pricing else None),
        output_price=parse_api_price(pricing.completion if pricing else None),
        description=guess.description,
    )


def fetch_catalog(
    api_key: str | None = None,
    base_url: str | None = None,
    *,
    http_client: HttpClient | None = None,
) -> CatalogResult:
    """Fetch and merge the remote catalog, reporting why it degraded if it did.

    Never raises. On any degradation ``models`` is a copy of the static table.
    """
    if not api_key:
        logger.warning("CometAPI: No API key provided, using static model definitions")
        return CatalogResult(static_catalog(), DegradeReason.NO_API_KEY, "no API key")

    client = http_client
    try:
        if client is None:
            client = HttpClient(
                base_url or DEFAULT_BASE_URL,
                headers={
                    "Authorization": f"Bearer {api_key}",
                    "Content-Type": "application/json",
                },
                timeout=CATALOG_TIMEOUT,
            )
        body = client.get_json("/models", timeout=CATALOG_TIMEOUT)
    except (SDKError, ValueError, TypeError) as exc:
        # Building the client raises ValueError or TypeError for header values
        # httpx cannot encode, such as a non-ASCII key
        logger.error("Error fetching CometAPI models: %s", exc)
        logger.warning("CometAPI: Falling back to static model definitions")
        return CatalogResult(static_catalog(), DegradeReason.TRANSPORT, str(exc))
    finally:
        if http_client is None and client is not None:
            client.close()

    try:
        parsed = CometModelsResponse.model_validate(body)
    except ValidationError as exc:
        logger.error("CometAPI models response is invalid: %s", exc)
        logger.warning("CometAPI: Falling back to static model definitions")
        return CatalogResult(static_catalog(), DegradeReason.INVALID_RESPONSE, str(exc))

    remote: ModelCatalog = {}
    for descriptor in parsed.data:
        if not is_text_generation_model(descriptor.id):
            continue
        try:
            remote[descriptor.id] = synthesize_model_info(descriptor)
        except (ValueError, OverflowError) as exc:
            logger.warning("CometAPI: Skipping model %r: %s", descriptor.id, exc)

    # Remote entries take precedence over static ones with the same id
    merged = {**static_catalog(), **remote}
    logger.info("CometAPI: Successfully loaded %d models from API", len(remote))
    return CatalogResult(merged)


def resolve_catalog(
    api_key: str | None = None,
    base_url: str | None = None,
    *,
    http_client: HttpClient | None = None,
    on_degrade: DegradeHook | None = None,
) -> ModelCatalog:
    """Return the model catalog for *api_key*, degrading to the static table.

    *on_degrade* receives the reason and detail whenever the static table is
    served instead of the remote catalog.
    """
    result = fetch_catalog(api_key, base_url, http_client=http_client)
    if result.degraded is not None and on_degrade is not None:
        on_degrade(result.degraded, result.detail)
    return result.models
