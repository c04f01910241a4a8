"""Model catalog: static table, heuristics and remote resolution."""
from __future__ import annotations

from comet_gateway.catalog._data import COMETAPI_MODELS, DEFAULT_MODEL_ID
from comet_gateway.catalog._rules import (
    FAMILY_RULES,
    FamilyRule,
    classify_model,
    is_text_generation_model,
)
from comet_gateway.catalog.resolver import fetch_catalog, resolve_catalog, static_catalog
from comet_gateway.catalog.types import CatalogResult, DegradeReason, ModelCatalog, ModelInfo

__all__ = [
    "COMETAPI_MODELS",
    "DEFAULT_MODEL_ID",
    "FAMILY_RULES",
    "FamilyRule",
    "CatalogResult",
    "DegradeReason",
    "ModelCatalog",
    "ModelInfo",
    "classify_model",
    "fetch_catalog",
    "is_text_generation_model",
    "resolve_catalog",
    "static_catalog",
]
