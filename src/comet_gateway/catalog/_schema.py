"""Pydantic models for the CometAPI ``GET /models`` response body."""
from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr

Number = Union[StrictInt, StrictFloat]


class ModelArchitecture(BaseModel):
    modality: StrictStr | None = None
    tokenizer: StrictStr | None = None


class ModelPricing(BaseModel):
    """Per-token prices, sent as decimal strings."""

    prompt: StrictStr | None = None
    completion: StrictStr | None = None


class CometModelDescriptor(BaseModel):
    """One entry of ``data``. Only ``id`` is guaranteed by the gateway.

    Optional fields may be omitted but not sent as ``null``.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    id: StrictStr
    object: StrictStr = None  # "model"
    created: Number = None
    owned_by: StrictStr = None
    # Legacy fields, rarely present
    name: StrictStr = None
    description: StrictStr = None
    context_length: Number = None
    max_tokens: Number = None
    architecture: ModelArchitecture = None
    pricing: ModelPricing = None


class CometModelsResponse(BaseModel):
    data: list[CometModelDescriptor]
    success: StrictBool = None
