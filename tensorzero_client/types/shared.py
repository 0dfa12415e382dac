"""Small shared records: usage, finish reason, ordering, tools, extra body."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import Field, model_validator

from tensorzero_client.types.registry import WireModel


class Usage(WireModel):
    input_tokens: int = 0
    output_tokens: int = 0


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    TOOL_CALL = "tool_call"
    CONTENT_FILTER = "content_filter"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> FinishReason:
        return cls.UNKNOWN


# ---------------------------------------------------------------------------
# Ordering for list queries
# ---------------------------------------------------------------------------

OrderDirection = Literal["ASC", "DESC"]


class OrderBy(WireModel):
    """Sort key for ``ListInferencesRequest``.

    Build with :meth:`by_timestamp` or :meth:`by_metric`; only the latter
    takes a metric name.
    """

    by: Literal["timestamp", "metric"]
    name: str | None = None
    direction: OrderDirection = "DESC"

    @model_validator(mode="after")
    def _name_matches_key(self) -> OrderBy:
        if self.by == "metric" and not self.name:
            raise ValueError("ordering by metric requires a metric name")
        if self.by == "timestamp" and self.name is not None:
            raise ValueError("ordering by timestamp takes no name")
        return self

    @classmethod
    def by_timestamp(cls, direction: OrderDirection = "DESC") -> OrderBy:
        return cls(by="timestamp", direction=direction)

    @classmethod
    def by_metric(cls, name: str, direction: OrderDirection = "DESC") -> OrderBy:
        return cls(by="metric", name=name, direction=direction)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

class Tool(WireModel):
    """A tool definition the model may call."""
    name: str
    description: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    strict: bool = False


class ToolParams(WireModel):
    tools_available: list[Tool] = Field(default_factory=list)
    tool_choice: str | dict[str, Any] = "auto"
    parallel_tool_calls: bool | None = None


# ---------------------------------------------------------------------------
# Extra body overrides
# ---------------------------------------------------------------------------

class VariantExtraBody(WireModel):
    """JSON-pointer patch applied to the provider request for one variant."""
    variant_name: str
    pointer: str
    value: Any = None
    delete: bool | None = None


class ProviderExtraBody(WireModel):
    """JSON-pointer patch applied to the provider request for one model provider."""
    model_provider_name: str
    pointer: str
    value: Any = None
    delete: bool | None = None
