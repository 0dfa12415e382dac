"""Tests for the JSON-lines CLI adapter, run against the mock gateway."""

from __future__ import annotations

import json

from tensorzero_client.adapters.cli.main import run_cli


async def test_stream_prints_one_line_per_chunk(monkeypatch, capsys):
    monkeypatch.setenv("USE_MOCK_GATEWAY", "1")

    code = await run_cli("Hello world", "basic_test")

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert code == 0
    assert "".join(piece["text"] for line in lines for piece in line["content"]) == "[mock] Hello world"
    assert lines[-1]["finish_reason"] == "stop"


async def test_non_streaming_prints_response(monkeypatch, capsys):
    monkeypatch.setenv("USE_MOCK_GATEWAY", "1")

    code = await run_cli("ping", "basic_test", stream=False)

    (line,) = capsys.readouterr().out.splitlines()
    assert code == 0
    assert json.loads(line)["content"] == [{"type": "text", "text": "[mock] ping"}]
