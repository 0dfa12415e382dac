"""Dual-channel delivery for one streaming inference call.

One background task reads chunks from the transport and owns two channels:

* the chunk channel, carrying chunks in exactly the order the transport
  produced them;
* the error channel, carrying at most one error.

An error is always the last thing produced: the chunk channel closes right
after it. Normal completion closes the chunk channel with nothing on the
error channel. Cancellation (``stream.cancel()`` or setting the event passed
to the gateway) is cooperative: the producer stops between reads, both
channels close, no chunk is delivered once cancellation is seen, and nothing
is reported as an error.

The chunk channel is bounded: once ``CHUNK_BUFFER`` chunks are waiting, the
producer stops reading from the transport until the consumer catches up.
Drain ``chunks()`` (or cancel) before awaiting ``error()`` or
``wait_closed()``.

Each channel supports exactly one consumer.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, AsyncIterator

from tensorzero_client.types.inference import InferenceChunk

logger = logging.getLogger(__name__)

_CLOSED: Any = object()

# Chunks buffered ahead of the consumer before the producer stops reading.
CHUNK_BUFFER = 10


async def _pull(iterator: AsyncIterator[InferenceChunk]) -> Any:
    try:
        return await iterator.__anext__()
    except StopAsyncIteration:
        return _CLOSED


class InferenceStream:
    """Public API: ``async for chunk in stream.chunks(): ...`` then ``await stream.error()``."""

    def __init__(
        self,
        source: AsyncIterator[InferenceChunk],
        cancel_event: asyncio.Event | None = None,
        buffer: int = CHUNK_BUFFER,
    ) -> None:
        self._source = source
        self._cancel = cancel_event if cancel_event is not None else asyncio.Event()
        self._chunks: asyncio.Queue[Any] = asyncio.Queue(maxsize=buffer)
        self._errors: asyncio.Queue[Any] = asyncio.Queue()
        self._chunks_closed = False
        self._errors_closed = False
        self._error: Exception | None = None
        self._produced = 0
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def open(
        cls,
        source: AsyncIterator[InferenceChunk],
        cancel_event: asyncio.Event | None = None,
        buffer: int = CHUNK_BUFFER,
    ) -> InferenceStream:
        """Start the producer task and return immediately."""
        stream = cls(source, cancel_event=cancel_event, buffer=buffer)
        stream._task = asyncio.create_task(stream._produce(), name="tensorzero-inference-stream")
        return stream

    # ------------------------------------------------------------------
    # Producer
    # ------------------------------------------------------------------

    async def _produce(self) -> None:
        try:
            await self._pump(aiter(self._source))
        except Exception as exc:
            if self._cancel.is_set():
                logger.debug("Ignoring stream error raised after cancellation: %s", exc)
            else:
                logger.warning("Inference stream failed after %d chunks: %s", self._produced, exc)
                self._error = exc
                self._errors.put_nowait(exc)
        finally:
            await self._close_chunks()
            self._errors.put_nowait(_CLOSED)
            logger.debug(
                "Inference stream closed (chunks=%d cancelled=%s error=%s)",
                self._produced, self._cancel.is_set(), self._error is not None,
            )

    async def _pump(self, iterator: AsyncIterator[InferenceChunk]) -> None:
        try:
            while not self._cancel.is_set():
                chunk = await self._next_or_cancel(iterator)
                if chunk is _CLOSED or self._cancel.is_set():
                    break
                if not await self._offer(chunk):
                    break
                self._produced += 1
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()

    async def _next_or_cancel(self, iterator: AsyncIterator[InferenceChunk]) -> Any:
        """Wait for the next transport read, giving up early if cancelled."""
        pull = asyncio.ensure_future(_pull(iterator))
        cancelled = asyncio.ensure_future(self._cancel.wait())
        try:
            await asyncio.wait({pull, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not pull.done():
                pull.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await pull
        if pull.cancelled():
            return _CLOSED
        return pull.result()

    async def _offer(self, item: Any) -> bool:
        """Put *item* on the chunk channel, waiting for room; False if cancelled first."""
        if self._cancel.is_set():
            return False
        if not self._chunks.full():
            self._chunks.put_nowait(item)
            return True
        put = asyncio.ensure_future(self._chunks.put(item))
        cancelled = asyncio.ensure_future(self._cancel.wait())
        try:
            await asyncio.wait({put, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not put.done():
                put.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await put
        return not put.cancelled()

    async def _close_chunks(self) -> None:
        if await self._offer(_CLOSED):
            return
        # cancelled: buffered chunks will never be delivered, so make room
        while not self._chunks.empty():
            self._chunks.get_nowait()
        self._chunks.put_nowait(_CLOSED)

    # ------------------------------------------------------------------
    # Consumer
    # ------------------------------------------------------------------

    async def chunks(self) -> AsyncIterator[InferenceChunk]:
        """Yield chunks in transport order until the channel closes."""
        while not self._chunks_closed:
            item = await self._chunks.get()
            if item is _CLOSED:
                self._chunks_closed = True
                break
            if self._cancel.is_set():
                continue  # drain, never deliver after cancellation
            yield item

    def __aiter__(self) -> AsyncIterator[InferenceChunk]:
        return self.chunks()

    async def errors(self) -> AsyncIterator[Exception]:
        """Yield the terminal error, if any, then end."""
        while not self._errors_closed:
            item = await self._errors.get()
            if item is _CLOSED:
                self._errors_closed = True
                break
            yield item

    async def error(self) -> Exception | None:
        """Wait for the producer to finish and return its error, or None."""
        await self.wait_closed()
        return self._error

    async def wait_closed(self) -> None:
        if self._task is not None:
            await asyncio.wait({self._task})

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    async def aclose(self) -> None:
        self.cancel()
        await self.wait_closed()

    async def __aenter__(self) -> InferenceStream:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
