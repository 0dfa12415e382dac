"""CLI JSON-lines adapter — reads a prompt from argv/stdin, prints stream chunks as JSON."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys

from tensorzero_client import create_gateway
from tensorzero_client.builder import InferenceRequestBuilder
from tensorzero_client.types import Message, TensorZeroClientError


async def run_cli(text: str, function_name: str, stream: bool = True) -> int:
    request = (
        InferenceRequestBuilder()
        .with_function_name(function_name)
        .with_messages(Message.user(text))
        .build()
    )
    async with create_gateway() as gateway:
        if not stream:
            response = await gateway.inference(request)
            print(json.dumps(response.to_wire(), default=str), flush=True)
            return 0

        async with gateway.inference_stream(request) as chunks:
            async for chunk in chunks:
                print(json.dumps(chunk.to_wire(), default=str), flush=True)
            err = await chunks.error()
    if err is not None:
        print(json.dumps({"error": str(err)}), flush=True)
        return 1
    return 0


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING"))
    function_name = os.environ.get("TENSORZERO_FUNCTION_NAME", "basic_test")
    stream = True

    if len(sys.argv) > 1:
        text = " ".join(sys.argv[1:])
    else:
        raw = sys.stdin.read().strip()
        if not raw:
            print(
                "Usage: tensorzero-cli <text>  OR  echo '{\"text\":\"...\",\"function_name\":\"...\"}' | tensorzero-cli",
                file=sys.stderr,
            )
            sys.exit(1)
        try:
            data = json.loads(raw)
            text = data.get("text", raw)
            function_name = data.get("function_name", function_name)
            stream = data.get("stream", True)
        except (json.JSONDecodeError, AttributeError):
            text = raw

    try:
        sys.exit(asyncio.run(run_cli(text, function_name, stream=stream)))
    except TensorZeroClientError as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
