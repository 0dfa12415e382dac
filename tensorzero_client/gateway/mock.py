"""In-memory gateway — deterministic, pre-loaded responses for tests and demos."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Sequence, Union
from uuid import UUID, uuid4

from tensorzero_client.gateway.interface import Gateway
from tensorzero_client.types.datapoint import Datapoint, DatapointInsert, ListDatapointsRequest
from tensorzero_client.types.content import Text, TextChunk
from tensorzero_client.types.errors import TensorZeroError
from tensorzero_client.types.feedback import (
    DynamicEvaluationRunEpisodeRequest,
    DynamicEvaluationRunEpisodeResponse,
    DynamicEvaluationRunRequest,
    DynamicEvaluationRunResponse,
    FeedbackRequest,
    FeedbackResponse,
)
from tensorzero_client.types.inference import (
    ChatChunk,
    ChatInferenceResponse,
    InferenceChunk,
    InferenceRequest,
    InferenceResponse,
    ListInferencesRequest,
    StoredInference,
)
from tensorzero_client.types.shared import FinishReason, Usage

logger = logging.getLogger(__name__)

# A scripted stream step: a chunk to emit, or an exception to raise.
StreamStep = Union[InferenceChunk, Exception]


def _echo(request: InferenceRequest) -> str:
    """Last user text in the request, prefixed, or a placeholder."""
    for message in reversed(request.input.messages):
        if message.role != "user":
            continue
        for block in message.content:
            if isinstance(block, Text) and block.text is not None:
                return f"[mock] {block.text}"
    return "[mock responses exhausted]"


def _echo_script(request: InferenceRequest) -> list[StreamStep]:
    inference_id, episode_id = uuid4(), request.episode_id or uuid4()
    words = _echo(request).split(" ")
    steps: list[StreamStep] = [
        ChatChunk(
            inference_id=inference_id,
            episode_id=episode_id,
            variant_name="mock",
            content=[TextChunk(id="0", text=word if i == 0 else f" {word}")],
        )
        for i, word in enumerate(words)
    ]
    steps.append(
        ChatChunk(
            inference_id=inference_id,
            episode_id=episode_id,
            variant_name="mock",
            content=[],
            usage=Usage(input_tokens=0, output_tokens=len(words)),
            finish_reason=FinishReason.STOP,
        )
    )
    return steps


class MockGateway(Gateway):
    """Returns pre-configured responses in order.

    ``streams`` holds one script per ``inference_stream`` call; each script
    emits its chunks in order and raises the first exception it meets.
    ``delay`` (seconds) is awaited before every streamed step and every
    non-streaming response, which lets tests cancel mid-flight.

    Once the pre-loaded responses or scripts run out, calls echo the last user
    text back instead, so the mock doubles as a demo gateway.
    """

    def __init__(
        self,
        responses: Sequence[InferenceResponse] = (),
        streams: Sequence[Sequence[StreamStep]] = (),
        delay: float = 0.0,
        stored_inferences: Sequence[StoredInference] = (),
    ) -> None:
        self._responses = list(responses)
        self._streams = [list(s) for s in streams]
        self._delay = delay
        self._stored = list(stored_inferences)
        self._datasets: dict[str, dict[UUID, Datapoint]] = {}
        self.requests: list[InferenceRequest] = []
        self.feedback_requests: list[FeedbackRequest] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def _pause(self) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)

    # -- inference ---------------------------------------------------------

    async def _inference(self, request: InferenceRequest) -> InferenceResponse:
        self.requests.append(request)
        await self._pause()
        if not self._responses:
            return ChatInferenceResponse(
                inference_id=uuid4(),
                episode_id=request.episode_id or uuid4(),
                variant_name="mock",
                content=[Text(text=_echo(request))],
                finish_reason=FinishReason.STOP,
            )
        return self._responses.pop(0)

    async def _open_stream(self, request: InferenceRequest) -> AsyncIterator[InferenceChunk]:
        self.requests.append(request)
        script = self._streams.pop(0) if self._streams else _echo_script(request)
        for step in script:
            await self._pause()
            if isinstance(step, Exception):
                raise step
            yield step

    # -- feedback & evaluation ---------------------------------------------

    async def feedback(self, request: FeedbackRequest) -> FeedbackResponse:
        self.feedback_requests.append(request)
        return FeedbackResponse(feedback_id=uuid4())

    async def dynamic_evaluation_run(
        self, request: DynamicEvaluationRunRequest
    ) -> DynamicEvaluationRunResponse:
        return DynamicEvaluationRunResponse(run_id=uuid4())

    async def dynamic_evaluation_run_episode(
        self, request: DynamicEvaluationRunEpisodeRequest
    ) -> DynamicEvaluationRunEpisodeResponse:
        return DynamicEvaluationRunEpisodeResponse(episode_id=uuid4())

    # -- datasets ----------------------------------------------------------

    async def bulk_insert_datapoints(
        self, dataset_name: str, datapoints: Sequence[DatapointInsert]
    ) -> list[UUID]:
        dataset = self._datasets.setdefault(dataset_name, {})
        ids: list[UUID] = []
        for insert in datapoints:
            datapoint = Datapoint(
                id=uuid4(),
                input=insert.input,
                output=insert.output,
                dataset_name=dataset_name,
                function_name=insert.function_name,
                output_schema=getattr(insert, "output_schema", None),
                is_custom=True,
            )
            dataset[datapoint.id] = datapoint
            ids.append(datapoint.id)
        logger.info("Inserted %d datapoints into %s", len(ids), dataset_name)
        return ids

    async def delete_datapoint(self, dataset_name: str, datapoint_id: UUID) -> None:
        if self._datasets.get(dataset_name, {}).pop(datapoint_id, None) is None:
            raise TensorZeroError(404, f"datapoint {datapoint_id} not found in {dataset_name}")

    async def list_datapoints(self, request: ListDatapointsRequest) -> list[Datapoint]:
        rows = [
            d for d in self._datasets.get(request.dataset_name, {}).values()
            if request.function_name is None or d.function_name == request.function_name
        ]
        start = request.offset or 0
        end = start + request.limit if request.limit is not None else None
        return rows[start:end]

    # -- stored inferences -------------------------------------------------

    async def list_inferences(self, request: ListInferencesRequest) -> list[StoredInference]:
        # Filters and ordering are evaluated by the real gateway only.
        rows = [
            s for s in self._stored
            if (request.function_name is None or s.function_name == request.function_name)
            and (request.episode_id is None or s.episode_id == request.episode_id)
            and (request.variant_name is None or s.variant_name == request.variant_name)
        ]
        start = request.offset or 0
        end = start + request.limit if request.limit is not None else None
        return rows[start:end]

    async def aclose(self) -> None:
        self.closed = True
