"""HTTP transport over ``httpx.AsyncClient``."""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Sequence
from urllib.parse import quote
from uuid import UUID

import httpx
from pydantic import TypeAdapter

from tensorzero_client.gateway.interface import Gateway
from tensorzero_client.streaming.sse import DONE_SENTINEL, iter_sse_events
from tensorzero_client.types.datapoint import Datapoint, DatapointInsert, ListDatapointsRequest
from tensorzero_client.types.errors import TensorZeroError, TransportError
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
    decode_inference_chunk,
    decode_inference_response,
)
from tensorzero_client.types.registry import WireModel

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"

_UUID_LIST = TypeAdapter(list[UUID])
_DATAPOINT_LIST = TypeAdapter(list[Datapoint])
_STORED_INFERENCE_LIST = TypeAdapter(list[StoredInference])


def _body(model: WireModel) -> dict[str, Any]:
    return model.to_wire()


def _datapoint_body(datapoint: DatapointInsert) -> dict[str, Any]:
    return {"type": datapoint.type, **datapoint.to_wire()}


class HTTPGateway(Gateway):
    """Talks to a running TensorZero gateway.

    Pass ``client`` to reuse an existing ``httpx.AsyncClient`` (tests hand in
    one backed by ``httpx.ASGITransport``); its ``base_url`` is then used and
    the gateway does not close it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        ok: tuple[int, ...] = (200,),
    ) -> httpx.Response:
        logger.info("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=body, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        if response.status_code not in ok:
            logger.warning("%s %s returned %d", method, path, response.status_code)
            raise TensorZeroError(response.status_code, response.text)
        return response

    async def _json(self, method: str, path: str, body: Any = None, params: dict[str, Any] | None = None) -> Any:
        response = await self._request(method, path, body=body, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned a non-JSON body") from exc

    # ------------------------------------------------------------------
    # Inference
    # ------------------------------------------------------------------

    async def _inference(self, request: InferenceRequest) -> InferenceResponse:
        return decode_inference_response(await self._json("POST", "/inference", _body(request)))

    async def _open_stream(self, request: InferenceRequest) -> AsyncIterator[InferenceChunk]:
        headers = {"Accept": "text/event-stream"}
        try:
            async with self._client.stream("POST", "/inference", json=_body(request), headers=headers) as response:
                if response.status_code != 200:
                    text = (await response.aread()).decode("utf-8", errors="replace")
                    raise TensorZeroError(response.status_code, text)
                async for event in iter_sse_events(response.aiter_lines()):
                    if not event.data:
                        continue
                    if event.data == DONE_SENTINEL:
                        return
                    try:
                        payload = json.loads(event.data)
                    except json.JSONDecodeError as exc:
                        raise TransportError(f"undecodable stream event: {event.data[:200]!r}") from exc
                    yield decode_inference_chunk(payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"POST /inference stream failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Feedback & dynamic evaluation
    # ------------------------------------------------------------------

    async def feedback(self, request: FeedbackRequest) -> FeedbackResponse:
        return FeedbackResponse.model_validate(await self._json("POST", "/feedback", _body(request)))

    async def dynamic_evaluation_run(
        self, request: DynamicEvaluationRunRequest
    ) -> DynamicEvaluationRunResponse:
        data = await self._json("POST", "/dynamic_evaluation_run", _body(request))
        return DynamicEvaluationRunResponse.model_validate(data)

    async def dynamic_evaluation_run_episode(
        self, request: DynamicEvaluationRunEpisodeRequest
    ) -> DynamicEvaluationRunEpisodeResponse:
        data = await self._json("POST", "/dynamic_evaluation_run_episode", _body(request))
        return DynamicEvaluationRunEpisodeResponse.model_validate(data)

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------

    async def bulk_insert_datapoints(
        self, dataset_name: str, datapoints: Sequence[DatapointInsert]
    ) -> list[UUID]:
        path = f"/datasets/{quote(dataset_name, safe='')}/datapoints/bulk"
        body = {"datapoints": [_datapoint_body(d) for d in datapoints]}
        return _UUID_LIST.validate_python(await self._json("POST", path, body))

    async def delete_datapoint(self, dataset_name: str, datapoint_id: UUID) -> None:
        path = f"/datasets/{quote(dataset_name, safe='')}/datapoints/{datapoint_id}"
        await self._request("DELETE", path, ok=(200, 204))

    async def list_datapoints(self, request: ListDatapointsRequest) -> list[Datapoint]:
        path = f"/datasets/{quote(request.dataset_name, safe='')}/datapoints"
        data = await self._json("GET", path, params=request.query_params())
        return _DATAPOINT_LIST.validate_python(data)

    # ------------------------------------------------------------------
    # Stored inferences
    # ------------------------------------------------------------------

    async def list_inferences(self, request: ListInferencesRequest) -> list[StoredInference]:
        data = await self._json("POST", "/inferences/list", _body(request))
        return _STORED_INFERENCE_LIST.validate_python(data)
