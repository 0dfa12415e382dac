"""Shared fixtures for tensorzero_client tests."""

from __future__ import annotations

import json
from typing import Any
from uuid import uuid4

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from tensorzero_client.gateway.http import HTTPGateway
from tensorzero_client.gateway.mock import MockGateway

from payloads import chat_chunk_payload, chat_response_payload, sse


class FakeGateway:
    """In-process TensorZero gateway built on FastAPI.

    Tests set the canned replies, then inspect ``requests`` afterwards.
    """

    def __init__(self) -> None:
        self.inference_payload: dict[str, Any] = chat_response_payload()
        self.stream_events: list[str] = [
            sse(chat_chunk_payload("Hel")),
            sse(chat_chunk_payload("lo")),
            sse("[DONE]"),
        ]
        self.fail_with: tuple[int, str] | None = None
        self.stored_inferences: list[dict[str, Any]] = []
        self.datapoints: list[dict[str, Any]] = []
        self.requests: list[dict[str, Any]] = []
        self.app = self._build_app()

    def _failure(self) -> Response | None:
        if self.fail_with is None:
            return None
        status, text = self.fail_with
        return Response(content=text, status_code=status, media_type="text/plain")

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        async def record(request: Request) -> dict[str, Any]:
            body = await request.body()
            entry = {
                "method": request.method,
                "path": request.url.path,
                "params": dict(request.query_params),
                "headers": dict(request.headers),
                "json": json.loads(body) if body else None,
            }
            self.requests.append(entry)
            return entry

        @app.post("/inference")
        async def inference(request: Request):
            entry = await record(request)
            if (failure := self._failure()) is not None:
                return failure
            if "text/event-stream" in entry["headers"].get("accept", ""):
                async def events():
                    for event in self.stream_events:
                        yield event
                return StreamingResponse(events(), media_type="text/event-stream")
            return JSONResponse(self.inference_payload)

        @app.post("/feedback")
        async def feedback(request: Request):
            await record(request)
            return self._failure() or JSONResponse({"feedback_id": str(uuid4())})

        @app.post("/dynamic_evaluation_run")
        async def dynamic_evaluation_run(request: Request):
            await record(request)
            return JSONResponse({"run_id": str(uuid4())})

        @app.post("/dynamic_evaluation_run_episode")
        async def dynamic_evaluation_run_episode(request: Request):
            await record(request)
            return JSONResponse({"episode_id": str(uuid4())})

        @app.post("/datasets/{dataset_name}/datapoints/bulk")
        async def bulk_insert(dataset_name: str, request: Request):
            entry = await record(request)
            return JSONResponse([str(uuid4()) for _ in entry["json"]["datapoints"]])

        @app.delete("/datasets/{dataset_name}/datapoints/{datapoint_id}")
        async def delete_datapoint(dataset_name: str, datapoint_id: str, request: Request):
            await record(request)
            return self._failure() or Response(status_code=204)

        @app.get("/datasets/{dataset_name}/datapoints")
        async def list_datapoints(dataset_name: str, request: Request):
            await record(request)
            return JSONResponse(self.datapoints)

        @app.post("/inferences/list")
        async def list_inferences(request: Request):
            await record(request)
            return JSONResponse(self.stored_inferences)

        return app


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
async def http_gateway(fake_gateway):
    client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=fake_gateway.app),
        base_url="http://gateway.test",
    )
    gateway = HTTPGateway(base_url="http://gateway.test", client=client)
    yield gateway
    await client.aclose()


@pytest.fixture
def mock_gateway():
    return MockGateway()
