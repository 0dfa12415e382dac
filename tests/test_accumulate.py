"""Tests for folding streamed chunks back into content."""

from __future__ import annotations

from tensorzero_client.streaming.accumulate import collect_content, collect_json, summarise
from tensorzero_client.types.content import Text, Thought, ToolCall
from tensorzero_client.types.inference import decode_inference_chunk
from tensorzero_client.types.shared import FinishReason

from payloads import EPISODE_ID, INFERENCE_ID


def _chat(*pieces, **extra):
    return decode_inference_chunk({
        "inference_id": INFERENCE_ID,
        "episode_id": EPISODE_ID,
        "variant_name": "test",
        "content": list(pieces),
        **extra,
    })


def _json(raw: str, **extra):
    return decode_inference_chunk({
        "inference_id": INFERENCE_ID,
        "episode_id": EPISODE_ID,
        "variant_name": "test",
        "raw": raw,
        **extra,
    })


def test_text_pieces_merge_by_id():
    chunks = [
        _chat({"type": "text", "id": "0", "text": "Hel"}),
        _chat({"type": "text", "id": "1", "text": "Second"}),
        _chat({"type": "text", "id": "0", "text": "lo"}),
    ]
    assert collect_content(chunks) == [Text(text="Hello"), Text(text="Second")]


def test_tool_call_arguments_concatenate():
    chunks = [
        _chat({"type": "tool_call", "id": "c1", "raw_name": "get_weather", "raw_arguments": '{"city":'}),
        _chat({"type": "tool_call", "id": "c1", "raw_name": "", "raw_arguments": ' "Oslo"}'}),
    ]
    assert collect_content(chunks) == [
        ToolCall(id="c1", raw_name="get_weather", raw_arguments='{"city": "Oslo"}'),
    ]


def test_thought_keeps_last_signature():
    chunks = [
        _chat({"type": "thought", "id": "t", "text": "Let me ", "signature": "s1"}),
        _chat({"type": "thought", "id": "t", "text": "think"}),
        _chat({"type": "thought", "id": "t", "text": ".", "signature": "s2"}),
    ]
    assert collect_content(chunks) == [Thought(text="Let me think.", signature="s2")]


def test_same_id_different_type_kept_apart():
    chunks = [_chat({"type": "text", "id": "0", "text": "a"}, {"type": "thought", "id": "0", "text": "b"})]
    assert collect_content(chunks) == [Text(text="a"), Thought(text="b")]


def test_json_raw_concatenates():
    assert collect_json([_json('{"ans'), _json('wer": 1}')]) == '{"answer": 1}'


def test_summary_takes_last_usage_and_finish_reason():
    chunks = [
        _json("{", usage={"input_tokens": 5, "output_tokens": 1}),
        _json("}", usage={"input_tokens": 5, "output_tokens": 2}, finish_reason="stop"),
    ]
    summary = summarise(chunks)
    assert summary.raw == "{}"
    assert summary.content == []
    assert summary.usage.output_tokens == 2
    assert summary.finish_reason is FinishReason.STOP
