"""Fold streamed chunks back into complete content.

Purely consumer-side: the stream itself never merges anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from tensorzero_client.types.content import (
    ContentBlock,
    Text,
    TextChunk,
    Thought,
    ThoughtChunk,
    ToolCall,
    ToolCallChunk,
)
from tensorzero_client.types.inference import ChatChunk, InferenceChunk, JsonChunk
from tensorzero_client.types.shared import FinishReason, Usage


@dataclass
class _Partial:
    kind: str
    id: str
    text: str = ""
    raw_name: str = ""
    signature: str | None = None

    def to_block(self) -> ContentBlock:
        if self.kind == "text":
            return Text(text=self.text)
        if self.kind == "tool_call":
            return ToolCall(id=self.id, raw_name=self.raw_name, raw_arguments=self.text)
        return Thought(text=self.text, signature=self.signature)


@dataclass
class StreamSummary:
    content: list[ContentBlock] = field(default_factory=list)
    raw: str = ""
    usage: Usage | None = None
    finish_reason: FinishReason | None = None


def collect_content(chunks: Iterable[InferenceChunk]) -> list[ContentBlock]:
    """Merge chat chunk pieces by ``(type, id)``, ordered by first appearance.

    Text and tool-call arguments concatenate; a thought keeps the last
    signature it was sent.
    """
    partials: dict[tuple[str, str], _Partial] = {}
    for chunk in chunks:
        if not isinstance(chunk, ChatChunk):
            continue
        for piece in chunk.content:
            key = (piece.type, piece.id)
            partial = partials.get(key)
            if partial is None:
                partial = partials[key] = _Partial(kind=piece.type, id=piece.id)
            if isinstance(piece, TextChunk):
                partial.text += piece.text
            elif isinstance(piece, ToolCallChunk):
                partial.text += piece.raw_arguments
                partial.raw_name += piece.raw_name
            elif isinstance(piece, ThoughtChunk):
                partial.text += piece.text
                if piece.signature is not None:
                    partial.signature = piece.signature
    return [p.to_block() for p in partials.values()]


def collect_json(chunks: Iterable[InferenceChunk]) -> str:
    """Concatenate the ``raw`` text of JSON chunks."""
    return "".join(chunk.raw for chunk in chunks if isinstance(chunk, JsonChunk))


def summarise(chunks: Iterable[InferenceChunk]) -> StreamSummary:
    """Content, raw JSON text, and the last usage / finish reason seen."""
    chunks = list(chunks)
    summary = StreamSummary(content=collect_content(chunks), raw=collect_json(chunks))
    for chunk in chunks:
        if chunk.usage is not None:
            summary.usage = chunk.usage
        if chunk.finish_reason is not None:
            summary.finish_reason = chunk.finish_reason
    return summary
