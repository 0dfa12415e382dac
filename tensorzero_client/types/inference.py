"""Inference request, responses, streamed chunks, and stored-inference queries."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Mapping, Union
from uuid import UUID

from pydantic import BeforeValidator, Field

from tensorzero_client.types.content import (
    CONTENT_CHUNKS,
    ContentBlockChunk,
    ContentBlockList,
    InferenceInput,
)
from tensorzero_client.types.filters import FILTERS, FilterNode
from tensorzero_client.types.registry import VariantRegistry, WireModel
from tensorzero_client.types.shared import (
    FinishReason,
    OrderBy,
    ProviderExtraBody,
    Tool,
    ToolParams,
    Usage,
    VariantExtraBody,
)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

ExtraBody = Union[VariantExtraBody, ProviderExtraBody]


class InferenceRequest(WireModel):
    """Body of ``POST /inference``.

    Normally set one of ``function_name`` / ``model_name``; the gateway
    enforces that, not this model. Build incrementally with
    :class:`tensorzero_client.builder.InferenceRequestBuilder`.
    """

    input: InferenceInput = Field(default_factory=InferenceInput)
    function_name: str | None = None
    model_name: str | None = None
    episode_id: UUID | None = None
    stream: bool | None = None
    params: dict[str, Any] | None = None
    variant_name: str | None = None
    dryrun: bool | None = None
    output_schema: dict[str, Any] | None = None
    allowed_tools: list[str] | None = None
    additional_tools: list[Tool] | None = None
    tool_choice: str | dict[str, Any] | None = None
    parallel_tool_calls: bool | None = None
    internal: bool | None = None
    tags: dict[str, str] | None = None
    credentials: dict[str, str] | None = None
    cache_options: dict[str, Any] | None = None
    extra_body: list[ExtraBody] | None = None
    extra_headers: list[dict[str, Any]] | None = None
    include_original_response: bool | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

def _response_shape(payload: Mapping[str, Any]) -> str | None:
    if isinstance(payload.get("content"), list):
        return "chat"
    if isinstance(payload.get("output"), Mapping):
        return "json"
    return None


INFERENCE_RESPONSES: VariantRegistry = VariantRegistry("inference response", tag_of=_response_shape)


class JsonInferenceOutput(WireModel):
    raw: str | None = None
    parsed: dict[str, Any] | None = None


@INFERENCE_RESPONSES.register
class ChatInferenceResponse(WireModel):
    type: ClassVar[str] = "chat"

    inference_id: UUID
    episode_id: UUID
    variant_name: str
    content: ContentBlockList
    usage: Usage = Field(default_factory=Usage)
    finish_reason: FinishReason | None = None
    original_response: str | None = None


@INFERENCE_RESPONSES.register
class JsonInferenceResponse(WireModel):
    type: ClassVar[str] = "json"

    inference_id: UUID
    episode_id: UUID
    variant_name: str
    output: JsonInferenceOutput
    usage: Usage = Field(default_factory=Usage)
    finish_reason: FinishReason | None = None
    original_response: str | None = None


InferenceResponse = Union[ChatInferenceResponse, JsonInferenceResponse]


def decode_inference_response(payload: Mapping[str, Any]) -> InferenceResponse:
    return INFERENCE_RESPONSES.decode(payload)


# ---------------------------------------------------------------------------
# Streamed chunks
# ---------------------------------------------------------------------------

def _chunk_shape(payload: Mapping[str, Any]) -> str | None:
    if isinstance(payload.get("content"), list):
        return "chat"
    if "raw" in payload:
        return "json"
    return None


INFERENCE_CHUNKS: VariantRegistry = VariantRegistry("inference chunk", tag_of=_chunk_shape)


def _decode_chunk_list(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return CONTENT_CHUNKS.decode_many(value)
    return value


@INFERENCE_CHUNKS.register
class ChatChunk(WireModel):
    type: ClassVar[str] = "chat"

    inference_id: UUID
    episode_id: UUID
    variant_name: str
    content: Annotated[list[ContentBlockChunk], BeforeValidator(_decode_chunk_list)]
    usage: Usage | None = None
    finish_reason: FinishReason | None = None


@INFERENCE_CHUNKS.register
class JsonChunk(WireModel):
    type: ClassVar[str] = "json"

    inference_id: UUID
    episode_id: UUID
    variant_name: str
    raw: str
    usage: Usage | None = None
    finish_reason: FinishReason | None = None


InferenceChunk = Union[ChatChunk, JsonChunk]


def decode_inference_chunk(payload: Mapping[str, Any]) -> InferenceChunk:
    return INFERENCE_CHUNKS.decode(payload)


# ---------------------------------------------------------------------------
# Stored inferences
# ---------------------------------------------------------------------------

def _decode_optional_filter(value: Any) -> Any:
    return FILTERS.decode(value) if isinstance(value, Mapping) else value


class ListInferencesRequest(WireModel):
    """Body of ``POST /inferences/list``."""

    function_name: str | None = None
    episode_id: UUID | None = None
    variant_name: str | None = None
    filter: Annotated[FilterNode | None, BeforeValidator(_decode_optional_filter)] = None
    order_by: OrderBy | None = None
    limit: int | None = None
    offset: int | None = None


class StoredInference(WireModel):
    id: UUID
    episode_id: UUID
    function_name: str
    variant_name: str
    input: InferenceInput
    output: Any = None
    tool_params: ToolParams | None = None
    processing_time: float | None = None
    timestamp: datetime
    tags: dict[str, str] | None = None
    metric_values: dict[str, Any] | None = None
