"""Tests for the SSE line parser."""

from __future__ import annotations

from tensorzero_client.streaming.sse import SSEEvent, iter_sse_events


async def _parse(text: str) -> list[SSEEvent]:
    async def lines():
        for line in text.splitlines(keepends=True):
            yield line

    return [event async for event in iter_sse_events(lines())]


async def test_single_data_event():
    assert await _parse('data: {"a": 1}\n\n') == [SSEEvent(data='{"a": 1}')]


async def test_multi_line_data_is_joined():
    events = await _parse("data: one\ndata: two\n\n")
    assert [e.data for e in events] == ["one\ntwo"]


async def test_comments_and_blank_runs_are_skipped():
    events = await _parse(": keep-alive\n\n\n\ndata: x\n\n")
    assert [e.data for e in events] == ["x"]


async def test_named_event_with_id():
    events = await _parse("event: message\nid: 7\nretry: 100\ndata: hi\n\n")
    assert events == [SSEEvent(event="message", data="hi", id="7", retry="100")]


async def test_field_without_colon_counts_as_data():
    events = await _parse("[DONE]\n\n")
    assert [e.data for e in events] == ["[DONE]"]


async def test_only_one_leading_space_is_stripped():
    events = await _parse("data:  padded\ndata:tight\n\n")
    assert events[0].data == " padded\ntight"


async def test_crlf_line_endings():
    events = await _parse("data: a\r\n\r\ndata: b\r\n\r\n")
    assert [e.data for e in events] == ["a", "b"]


async def test_trailing_event_without_blank_line():
    events = await _parse("data: first\n\ndata: last")
    assert [e.data for e in events] == ["first", "last"]


async def test_unknown_fields_ignored():
    assert await _parse("foo: bar\n\n") == []
