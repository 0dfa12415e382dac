from tensorzero_client.streaming.accumulate import (
    StreamSummary,
    collect_content,
    collect_json,
    summarise,
)
from tensorzero_client.streaming.sse import DONE_SENTINEL, SSEEvent, iter_sse_events
from tensorzero_client.streaming.stream import InferenceStream

__all__ = [
    "DONE_SENTINEL",
    "InferenceStream",
    "SSEEvent",
    "StreamSummary",
    "collect_content",
    "collect_json",
    "iter_sse_events",
    "summarise",
]
