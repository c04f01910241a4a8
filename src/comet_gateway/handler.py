"""CometAPI handler: model selection, request construction and stream normalization."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from comet_gateway._http import ChatCompletionsClient, RequestOptions
from comet_gateway.adapter import CreateMessageMetadata
from comet_gateway.catalog import COMETAPI_MODELS, DEFAULT_MODEL_ID, ModelCatalog, ModelInfo
from comet_gateway.catalog import resolve_catalog
from comet_gateway.config import DEFAULT_HEADERS, HandlerOptions
from comet_gateway.errors import (
    InBandProviderError,
    ProviderError,
    SDKError,
    in_band_error,
    make_error_readable,
)
from comet_gateway.model_params import get_model_params
from comet_gateway.pricing import CompletionUsage, total_cost
from comet_gateway.stream import StreamEvent, normalize_stream
from comet_gateway.transform import convert_to_openai_messages

logger = logging.getLogger(__name__)

CatalogResolver = Callable[[str | None, str | None], ModelCatalog]


@dataclass(frozen=True)
class ResolvedModel:
    """The model a request will use, with its derived parameters."""

    id: str
    info: ModelInfo
    max_tokens: int | None
    temperature: float


class CometAPIHandler:
    """Talks to the CometAPI gateway over its OpenAI-compatible API.

    Makes exactly one request per call; nothing is retried.
    """

    def __init__(
        self,
        options: HandlerOptions,
        *,
        client: ChatCompletionsClient | None = None,
        catalog_resolver: CatalogResolver | None = None,
    ) -> None:
        self.options = options
        self.client = client or ChatCompletionsClient(
            options.resolved_base_url,
            options.api_key or "not-provided",
            default_headers=DEFAULT_HEADERS,
        )
        self._resolve_catalog = catalog_resolver or resolve_catalog
        self.models: ModelCatalog = {}

    # ------------------------------------------------------------------
    # Model selection
    # ------------------------------------------------------------------

    def fetch_model(self) -> ResolvedModel:
        """Refresh the catalog, then select the configured model."""
        # Single assignment: concurrent readers see the old or the new catalog
        self.models = self._resolve_catalog(self.options.api_key, self.options.base_url)
        return self.get_model()

    resolve_model = fetch_model

    def get_model(self) -> ResolvedModel:
        """Select the configured model from the last resolved catalog.

        Unknown ids keep their literal value but borrow the default model's
        metadata, since the gateway may serve models it does not list.
        """
        model_id = self.options.model_id or DEFAULT_MODEL_ID
        info = self.models.get(model_id) or COMETAPI_MODELS[DEFAULT_MODEL_ID]
        params = get_model_params(
            format="openai", model_id=model_id, model=info, settings=self.options
        )
        return ResolvedModel(
            id=model_id,
            info=info,
            max_tokens=params.max_tokens,
            temperature=params.temperature,
        )

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def custom_request_options(
        self, metadata: CreateMessageMetadata | None = None
    ) -> RequestOptions | None:
        """Per-request transport options; subclasses may add headers or a timeout."""
        return None

    def get_total_cost(self, usage: CompletionUsage) -> float:
        return total_cost(usage)

    def create_message(
        self,
        system_prompt: str,
        messages: Sequence[dict[str, Any]],
        metadata: CreateMessageMetadata | None = None,
    ) -> Iterator[StreamEvent]:
        """Stream a reply as text events followed by at most one usage event."""
        model = self.fetch_model()

        params: dict[str, Any] = {"model": model.id}
        if model.max_tokens and model.max_tokens > 0:
            params["max_tokens"] = model.max_tokens
        params["temperature"] = model.temperature
        params["messages"] = [
            {"role": "system", "content": system_prompt},
            *convert_to_openai_messages(messages),
        ]
        params["stream"] = True
        params["stream_options"] = {"include_usage": True}

        logger.debug("CometAPI stream request: model=%s", model.id)
        request_options = self.custom_request_options(metadata)

        chunks = None
        try:
            if request_options is not None:
                chunks = self.client.create(params, request_options)
            else:
                chunks = self.client.create(params)
            yield from normalize_stream(chunks)
        except InBandProviderError:
            raise
        except SDKError as exc:
            raise _readable(exc) from exc
        finally:
            close = getattr(chunks, "close", None)
            if callable(close):
                close()

    def complete_prompt(self, prompt: str) -> str:
        """Answer a single user prompt without streaming."""
        model = self.fetch_model()

        params: dict[str, Any] = {"model": model.id}
        if model.max_tokens is not None:
            params["max_tokens"] = model.max_tokens
        params["temperature"] = model.temperature
        params["messages"] = [{"role": "user", "content": prompt}]
        params["stream"] = False

        response = self.client.create(params)

        if isinstance(response, dict) and "error" in response:
            err = response.get("error") or {}
            if not isinstance(err, dict):
                err = {"message": str(err)}
            logger.error("CometAPI Error: %s - %s", err.get("code"), err.get("message"))
            raise in_band_error(err.get("code"), err.get("message"), raw=response)

        choices = (response or {}).get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""


def _readable(exc: SDKError) -> SDKError:
    """Re-create *exc* with a user-facing message, keeping its type and fields."""
    message = make_error_readable(exc)
    if isinstance(exc, ProviderError):
        return type(exc)(
            message,
            status_code=exc.status_code,
            error_code=exc.error_code,
            raw=exc.raw,
            cause=exc,
        )
    return type(exc)(message, cause=exc)
