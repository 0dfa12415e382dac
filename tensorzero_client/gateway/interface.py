"""Gateway transport — ABC shared by the HTTP and mock implementations."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator, Awaitable, Sequence, TypeVar
from uuid import UUID

from tensorzero_client.streaming.stream import InferenceStream
from tensorzero_client.types.datapoint import Datapoint, DatapointInsert, ListDatapointsRequest
from tensorzero_client.types.feedback import (
    DynamicEvaluationRunEpisodeRequest,
    DynamicEvaluationRunEpisodeResponse,
    DynamicEvaluationRunRequest,
    DynamicEvaluationRunResponse,
    FeedbackRequest,
    FeedbackResponse,
)
from tensorzero_client.types.inference import (
    InferenceChunk,
    InferenceRequest,
    InferenceResponse,
    ListInferencesRequest,
    StoredInference,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def race_cancel(call: Awaitable[T], cancel_event: asyncio.Event | None) -> T:
    """Await ``call`` unless ``cancel_event`` fires first.

    Raises :class:`asyncio.CancelledError` when cancelled; the in-flight call
    is cancelled and its result discarded.
    """
    if cancel_event is None:
        return await call
    if cancel_event.is_set():
        if asyncio.iscoroutine(call):
            call.close()
        raise asyncio.CancelledError("inference cancelled before it started")

    work = asyncio.ensure_future(call)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not work.done():
            work.cancel()
            await asyncio.wait({work})
            if not work.cancelled() and work.exception() is not None:
                logger.debug("Discarding error from cancelled call: %s", work.exception())
            raise asyncio.CancelledError("inference cancelled")
    return work.result()


class Gateway(ABC):
    """Async TensorZero gateway interface.

    Implementations provide the raw calls; streaming delivery (ordering,
    the error channel, cancellation) lives in :class:`InferenceStream` and is
    the same for every transport.
    """

    # -- inference ---------------------------------------------------------

    async def inference(
        self,
        request: InferenceRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> InferenceResponse:
        """Run a non-streaming inference.

        ``request.stream`` is forced off. Raises ``asyncio.CancelledError`` if
        ``cancel_event`` is set before the response arrives.
        """
        request = request.model_copy(update={"stream": False})
        return await race_cancel(self._inference(request), cancel_event)

    def inference_stream(
        self,
        request: InferenceRequest,
        cancel_event: asyncio.Event | None = None,
    ) -> InferenceStream:
        """Start a streaming inference and return its channels immediately.

        Must be called from a running event loop.
        """
        request = request.model_copy(update={"stream": True})
        logger.info(
            "Opening inference stream (function=%s model=%s)",
            request.function_name, request.model_name,
        )
        return InferenceStream.open(self._open_stream(request), cancel_event=cancel_event)

    @abstractmethod
    async def _inference(self, request: InferenceRequest) -> InferenceResponse: ...

    @abstractmethod
    def _open_stream(self, request: InferenceRequest) -> AsyncIterator[InferenceChunk]:
        """Async generator of chunks in transport order; raises on failure."""

    # -- feedback & evaluation ---------------------------------------------

    @abstractmethod
    async def feedback(self, request: FeedbackRequest) -> FeedbackResponse: ...

    @abstractmethod
    async def dynamic_evaluation_run(
        self, request: DynamicEvaluationRunRequest
    ) -> DynamicEvaluationRunResponse: ...

    @abstractmethod
    async def dynamic_evaluation_run_episode(
        self, request: DynamicEvaluationRunEpisodeRequest
    ) -> DynamicEvaluationRunEpisodeResponse: ...

    # -- datasets ----------------------------------------------------------

    @abstractmethod
    async def bulk_insert_datapoints(
        self, dataset_name: str, datapoints: Sequence[DatapointInsert]
    ) -> list[UUID]: ...

    @abstractmethod
    async def delete_datapoint(self, dataset_name: str, datapoint_id: UUID) -> None: ...

    @abstractmethod
    async def list_datapoints(self, request: ListDatapointsRequest) -> list[Datapoint]: ...

    # -- stored inferences -------------------------------------------------

    @abstractmethod
    async def list_inferences(self, request: ListInferencesRequest) -> list[StoredInference]: ...

    # -- lifecycle ---------------------------------------------------------

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> Gateway:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
