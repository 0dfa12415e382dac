"""tensorzero_client — typed data model and async transport for the TensorZero gateway.

Usage::

    from tensorzero_client import InferenceRequestBuilder, Message, create_gateway

    request = (
        InferenceRequestBuilder()
        .with_function_name("basic_test")
        .with_messages(Message.user("Hello"))
        .build()
    )
    async with create_gateway() as gateway:
        stream = gateway.inference_stream(request)
        async for chunk in stream.chunks():
            print(chunk)
        if (err := await stream.error()) is not None:
            raise err
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()  # reads .env into os.environ (no-op if file missing)

from tensorzero_client.builder import FeedbackRequestBuilder, InferenceRequestBuilder
from tensorzero_client.gateway import DEFAULT_BASE_URL, Gateway, HTTPGateway, MockGateway
from tensorzero_client.streaming import InferenceStream, collect_content
from tensorzero_client.types import (
    ContentBlock,
    InferenceInput,
    InferenceRequest,
    Message,
    TensorZeroClientError,
    TensorZeroError,
    Text,
)

__all__ = [
    "ContentBlock",
    "FeedbackRequestBuilder",
    "Gateway",
    "HTTPGateway",
    "InferenceInput",
    "InferenceRequest",
    "InferenceRequestBuilder",
    "InferenceStream",
    "Message",
    "MockGateway",
    "TensorZeroClientError",
    "TensorZeroError",
    "Text",
    "collect_content",
    "create_gateway",
]


def create_gateway(
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    use_mock: bool | None = None,
) -> Gateway:
    """Return a ready-to-use gateway.

    Environment variables (all optional):
      TENSORZERO_GATEWAY_URL  — default ``http://localhost:3000``
      TENSORZERO_TIMEOUT      — request timeout in seconds, default ``30``
      USE_MOCK_GATEWAY        — set to ``1`` for the in-memory mock
    """
    mock = use_mock if use_mock is not None else os.environ.get("USE_MOCK_GATEWAY") == "1"
    if mock:
        return MockGateway()

    url = base_url or os.environ.get("TENSORZERO_GATEWAY_URL", DEFAULT_BASE_URL)
    seconds = timeout if timeout is not None else float(os.environ.get("TENSORZERO_TIMEOUT", "30"))
    return HTTPGateway(base_url=url, timeout=seconds)
