"""Request builders — accumulate optional fields, then freeze into a request.

Each ``with_*`` call sets exactly one field and returns the builder, so calls
chain. Calls apply in order and the last write to a field wins::

    request = (
        InferenceRequestBuilder()
        .with_function_name("draft_email")
        .with_messages(Message.user("hi"))
        .with_tags({"team": "growth"})
        .build()
    )

Nothing here validates combinations (e.g. function_name vs model_name);
the gateway does that.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from tensorzero_client.types.content import InferenceInput, Message
from tensorzero_client.types.feedback import FeedbackRequest
from tensorzero_client.types.inference import ExtraBody, InferenceRequest
from tensorzero_client.types.shared import Tool


class InferenceRequestBuilder:
    """Single-owner mutable accumulator for :class:`InferenceRequest`."""

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> InferenceRequestBuilder:
        self._fields[name] = value
        return self

    # -- input ---------------------------------------------------------------

    def with_input(self, input: InferenceInput) -> InferenceRequestBuilder:
        return self._set("input", input)

    def with_messages(self, *messages: Message) -> InferenceRequestBuilder:
        """Replace the input messages, keeping any system already set."""
        current: InferenceInput = self._fields.get("input", InferenceInput())
        return self._set("input", current.model_copy(update={"messages": list(messages)}))

    def with_system(self, system: str | dict[str, Any]) -> InferenceRequestBuilder:
        """Replace the input system, keeping any messages already set."""
        current: InferenceInput = self._fields.get("input", InferenceInput())
        return self._set("input", current.model_copy(update={"system": system}))

    # -- routing -------------------------------------------------------------

    def with_function_name(self, function_name: str) -> InferenceRequestBuilder:
        return self._set("function_name", function_name)

    def with_model_name(self, model_name: str) -> InferenceRequestBuilder:
        return self._set("model_name", model_name)

    def with_variant_name(self, variant_name: str) -> InferenceRequestBuilder:
        return self._set("variant_name", variant_name)

    def with_episode_id(self, episode_id: UUID) -> InferenceRequestBuilder:
        return self._set("episode_id", episode_id)

    # -- behaviour -----------------------------------------------------------

    def with_stream(self, stream: bool) -> InferenceRequestBuilder:
        return self._set("stream", stream)

    def with_dryrun(self, dryrun: bool) -> InferenceRequestBuilder:
        return self._set("dryrun", dryrun)

    def with_params(self, params: dict[str, Any]) -> InferenceRequestBuilder:
        return self._set("params", params)

    def with_output_schema(self, output_schema: dict[str, Any]) -> InferenceRequestBuilder:
        return self._set("output_schema", output_schema)

    def with_internal(self, internal: bool) -> InferenceRequestBuilder:
        return self._set("internal", internal)

    def with_tags(self, tags: dict[str, str]) -> InferenceRequestBuilder:
        return self._set("tags", tags)

    def with_credentials(self, credentials: dict[str, str]) -> InferenceRequestBuilder:
        return self._set("credentials", credentials)

    def with_cache_options(self, cache_options: dict[str, Any]) -> InferenceRequestBuilder:
        return self._set("cache_options", cache_options)

    def with_include_original_response(self, include: bool) -> InferenceRequestBuilder:
        return self._set("include_original_response", include)

    # -- tools ---------------------------------------------------------------

    def with_allowed_tools(self, allowed_tools: list[str]) -> InferenceRequestBuilder:
        return self._set("allowed_tools", allowed_tools)

    def with_additional_tools(self, additional_tools: list[Tool]) -> InferenceRequestBuilder:
        return self._set("additional_tools", additional_tools)

    def with_tool_choice(self, tool_choice: str | dict[str, Any]) -> InferenceRequestBuilder:
        return self._set("tool_choice", tool_choice)

    def with_parallel_tool_calls(self, parallel: bool) -> InferenceRequestBuilder:
        return self._set("parallel_tool_calls", parallel)

    # -- provider overrides --------------------------------------------------

    def with_extra_body(self, extra_body: list[ExtraBody]) -> InferenceRequestBuilder:
        return self._set("extra_body", extra_body)

    def with_extra_headers(self, extra_headers: list[dict[str, Any]]) -> InferenceRequestBuilder:
        return self._set("extra_headers", extra_headers)

    # -- freeze --------------------------------------------------------------

    def build(self) -> InferenceRequest:
        return InferenceRequest(**self._fields)


class FeedbackRequestBuilder:
    """Same semantics as :class:`InferenceRequestBuilder`, for feedback."""

    def __init__(self, metric_name: str, value: Any) -> None:
        self._fields: dict[str, Any] = {"metric_name": metric_name, "value": value}

    def _set(self, name: str, value: Any) -> FeedbackRequestBuilder:
        self._fields[name] = value
        return self

    def with_inference_id(self, inference_id: UUID) -> FeedbackRequestBuilder:
        return self._set("inference_id", inference_id)

    def with_episode_id(self, episode_id: UUID) -> FeedbackRequestBuilder:
        return self._set("episode_id", episode_id)

    def with_dryrun(self, dryrun: bool) -> FeedbackRequestBuilder:
        return self._set("dryrun", dryrun)

    def with_internal(self, internal: bool) -> FeedbackRequestBuilder:
        return self._set("internal", internal)

    def with_tags(self, tags: dict[str, str]) -> FeedbackRequestBuilder:
        return self._set("tags", tags)

    def build(self) -> FeedbackRequest:
        return FeedbackRequest(**self._fields)
