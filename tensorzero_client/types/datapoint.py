"""Dataset datapoints — inserts, stored datapoints, and list queries."""

from __future__ import annotations

from typing import Any, ClassVar, Union
from uuid import UUID

from tensorzero_client.types.content import InferenceInput
from tensorzero_client.types.registry import WireModel
from tensorzero_client.types.shared import Tool, ToolParams


class ChatDatapointInsert(WireModel):
    type: ClassVar[str] = "chat"

    function_name: str
    input: InferenceInput
    output: Any = None
    allowed_tools: list[str] | None = None
    additional_tools: list[Tool] | None = None
    tool_choice: str | None = None
    parallel_tool_calls: bool | None = None
    tags: dict[str, str] | None = None


class JsonDatapointInsert(WireModel):
    type: ClassVar[str] = "json"

    function_name: str
    input: InferenceInput
    output: Any = None
    output_schema: dict[str, Any] | None = None
    tags: dict[str, str] | None = None


DatapointInsert = Union[ChatDatapointInsert, JsonDatapointInsert]


class Datapoint(WireModel):
    id: UUID
    input: InferenceInput
    output: Any = None
    dataset_name: str
    function_name: str
    tool_params: ToolParams | None = None
    output_schema: dict[str, Any] | None = None
    is_custom: bool = False


class ListDatapointsRequest(WireModel):
    """Query for ``GET /datasets/{dataset_name}/datapoints``; sent as URL params."""

    dataset_name: str
    function_name: str | None = None
    limit: int | None = None
    offset: int | None = None

    def query_params(self) -> dict[str, Any]:
        return self.model_dump(exclude={"dataset_name"})
