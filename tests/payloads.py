"""Canned gateway payloads shared by the test modules."""

from __future__ import annotations

import json
from typing import Any

INFERENCE_ID = "0196a0e5-9f7c-7c30-8a0d-6f0b0f3a5e11"
EPISODE_ID = "0196a0e5-9f7c-7c30-8a0d-6f0b0f3a5e22"


def chat_response_payload(text: str = "Hello there") -> dict[str, Any]:
    return {
        "inference_id": INFERENCE_ID,
        "episode_id": EPISODE_ID,
        "variant_name": "test",
        "content": [{"type": "text", "text": text}],
        "usage": {"input_tokens": 10, "output_tokens": 2},
        "finish_reason": "stop",
    }


def chat_chunk_payload(text: str, block_id: str = "0", **extra: Any) -> dict[str, Any]:
    return {
        "inference_id": INFERENCE_ID,
        "episode_id": EPISODE_ID,
        "variant_name": "test",
        "content": [{"type": "text", "id": block_id, "text": text}],
        **extra,
    }


def sse(payload: Any) -> str:
    data = payload if isinstance(payload, str) else json.dumps(payload)
    return f"data: {data}\n\n"
