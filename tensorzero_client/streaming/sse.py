"""Server-sent events parsing over an async line iterator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator

DONE_SENTINEL = "[DONE]"


@dataclass
class SSEEvent:
    event: str = ""
    data: str = ""
    id: str = ""
    retry: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.event or self.data or self.id or self.retry)


async def iter_sse_events(lines: AsyncIterable[str]) -> AsyncIterator[SSEEvent]:
    """Group raw lines into events.

    A blank line ends an event; ``:`` lines are comments; repeated ``data``
    fields are joined with newlines; a line with no colon counts as data. An
    event still open when the input ends is emitted too.
    """
    event = SSEEvent()
    async for raw in lines:
        line = raw.rstrip("\r\n")
        if line == "":
            if not event.is_empty:
                yield event
            event = SSEEvent()
            continue
        if line.startswith(":"):
            continue

        field, sep, value = line.partition(":")
        if not sep:
            field, value = "data", line
        elif value.startswith(" "):
            value = value[1:]

        if field == "data":
            event.data = f"{event.data}\n{value}" if event.data else value
        elif field == "event":
            event.event = value
        elif field == "id":
            event.id = value
        elif field == "retry":
            event.retry = value

    if not event.is_empty:
        yield event
