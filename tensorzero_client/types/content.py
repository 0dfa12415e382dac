"""Content blocks, streamed content chunks, and the messages that carry them.

Content blocks are the one semi-open family: a block whose ``type`` this
client does not model is kept as an :class:`UnknownContentBlock` holding the
raw payload, so new provider content types survive a round trip instead of
failing the whole response.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BeforeValidator, Field, model_validator

from tensorzero_client.types.registry import VariantRegistry, WireModel


# ---------------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------------

class UnknownContentBlock(WireModel):
    """A block of a type this client does not model, kept verbatim."""
    type: Literal["unknown"] = "unknown"
    data: Any
    model_provider_name: str | None = None


def _unknown_from_payload(payload: Mapping[str, Any]) -> UnknownContentBlock:
    provider = payload.get("model_provider_name")
    return UnknownContentBlock(
        data=dict(payload),
        model_provider_name=provider if isinstance(provider, str) else None,
    )


CONTENT_BLOCKS: VariantRegistry = VariantRegistry("content block", fallback=_unknown_from_payload)
CONTENT_BLOCKS.register(UnknownContentBlock)


@CONTENT_BLOCKS.register
class Text(WireModel):
    """Either a literal string or structured template ``arguments``, never both."""

    type: Literal["text"] = "text"
    text: str | None = None
    arguments: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> Text:
        if (self.text is None) == (self.arguments is None):
            raise ValueError("text block needs exactly one of 'text' or 'arguments'")
        return self

    @classmethod
    def from_text(cls, text: str) -> Text:
        return cls(text=text)

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any]) -> Text:
        return cls(arguments=arguments)


@CONTENT_BLOCKS.register
class RawText(WireModel):
    """Text sent to the model as-is, bypassing templates."""
    type: Literal["raw_text"] = "raw_text"
    value: str


def _has_data(payload: Mapping[str, Any]) -> bool:
    return "data" in payload


def _has_url(payload: Mapping[str, Any]) -> bool:
    return "url" in payload and "data" not in payload


@CONTENT_BLOCKS.register(when=_has_data)
class ImageBase64(WireModel):
    type: Literal["image"] = "image"
    data: str
    mime_type: str


@CONTENT_BLOCKS.register(when=_has_url)
class ImageURL(WireModel):
    type: Literal["image"] = "image"
    url: str
    mime_type: str | None = None


@CONTENT_BLOCKS.register(when=_has_data)
class FileBase64(WireModel):
    type: Literal["file"] = "file"
    data: str
    mime_type: str


@CONTENT_BLOCKS.register(when=_has_url)
class FileURL(WireModel):
    type: Literal["file"] = "file"
    url: str


@CONTENT_BLOCKS.register
class ToolCall(WireModel):
    """A tool call requested by the model.

    ``raw_name`` and ``raw_arguments`` are exactly what the provider sent and
    are always present. ``name`` and ``arguments`` are filled in only when the
    gateway could resolve and parse them; check before relying on them.
    """

    type: Literal["tool_call"] = "tool_call"
    id: str
    raw_arguments: str
    raw_name: str
    arguments: dict[str, Any] | None = None
    name: str | None = None


@CONTENT_BLOCKS.register
class ToolResult(WireModel):
    type: Literal["tool_result"] = "tool_result"
    name: str
    result: str
    id: str


@CONTENT_BLOCKS.register
class Thought(WireModel):
    """Model reasoning. ``signature`` is an opaque provider attestation."""
    type: Literal["thought"] = "thought"
    text: str | None = None
    signature: str | None = None


ContentBlock = Union[
    Text,
    RawText,
    ImageBase64,
    ImageURL,
    FileBase64,
    FileURL,
    ToolCall,
    ToolResult,
    Thought,
    UnknownContentBlock,
]


def decode_content_block(payload: Mapping[str, Any]) -> ContentBlock:
    return CONTENT_BLOCKS.decode(payload)


def encode_content_block(block: ContentBlock) -> dict[str, Any]:
    return CONTENT_BLOCKS.encode(block)


# ---------------------------------------------------------------------------
# Streamed content chunks
# ---------------------------------------------------------------------------

CONTENT_CHUNKS: VariantRegistry = VariantRegistry("content block chunk")


@CONTENT_CHUNKS.register
class TextChunk(WireModel):
    type: Literal["text"] = "text"
    id: str
    text: str


@CONTENT_CHUNKS.register
class ToolCallChunk(WireModel):
    type: Literal["tool_call"] = "tool_call"
    id: str
    raw_arguments: str
    raw_name: str


@CONTENT_CHUNKS.register
class ThoughtChunk(WireModel):
    type: Literal["thought"] = "thought"
    id: str
    text: str
    signature: str | None = None


ContentBlockChunk = Union[TextChunk, ToolCallChunk, ThoughtChunk]


def decode_content_chunk(payload: Mapping[str, Any]) -> ContentBlockChunk:
    return CONTENT_CHUNKS.decode(payload)


def encode_content_chunk(chunk: ContentBlockChunk) -> dict[str, Any]:
    return CONTENT_CHUNKS.encode(chunk)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

def decode_block_list(value: Any) -> Any:
    """Before-validator shared by every field holding ``list[ContentBlock]``."""
    if isinstance(value, str):
        return [Text.from_text(value)]
    if isinstance(value, (list, tuple)):
        return CONTENT_BLOCKS.decode_many(value)
    return value


ContentBlockList = Annotated[list[ContentBlock], BeforeValidator(decode_block_list)]


class Message(WireModel):
    role: Literal["user", "assistant"]
    content: ContentBlockList = Field(default_factory=list)

    @classmethod
    def user(cls, *content: ContentBlock | str) -> Message:
        return cls(role="user", content=[_as_block(c) for c in content])

    @classmethod
    def assistant(cls, *content: ContentBlock | str) -> Message:
        return cls(role="assistant", content=[_as_block(c) for c in content])


def _as_block(item: ContentBlock | str) -> ContentBlock:
    return Text.from_text(item) if isinstance(item, str) else item


class InferenceInput(WireModel):
    messages: list[Message] = Field(default_factory=list)
    system: str | dict[str, Any] | None = None
