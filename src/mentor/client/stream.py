"""
Read loop for a streamed chat response: turns an httpx response body into a
lazy sequence of DeltaFrame items followed by exactly one StreamDone.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

import httpx

from mentor.client.sse import DeltaFrame, SSEDecoder, StreamDone, StreamEvent
from mentor.core.errors import StreamTimeoutError

logger = logging.getLogger(__name__)

_CANCELLED = object()
_EXHAUSTED = object()


class CancelToken:
    """Set once by the consumer to abort a pending stream."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


async def _anext(chunks: AsyncIterator[bytes]) -> object:
    try:
        return await chunks.__anext__()
    except StopAsyncIteration:
        return _EXHAUSTED


async def _read_chunk(
    chunks: AsyncIterator[bytes],
    idle_timeout: Optional[float],
    cancel_token: Optional[CancelToken],
) -> object:
    """Wait for the next chunk, the cancel signal, or the idle timeout, whichever comes first."""
    read = asyncio.ensure_future(_anext(chunks))
    waiters: set[asyncio.Future] = {read}
    if cancel_token is not None:
        waiters.add(asyncio.ensure_future(cancel_token.wait()))
    try:
        done, _ = await asyncio.wait(waiters, timeout=idle_timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [waiter for waiter in waiters if not waiter.done()]
        for waiter in pending:
            waiter.cancel()
        # The body iterator must be idle again before anyone closes it.
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if read in done:
        return read.result()
    if done:
        return _CANCELLED
    raise StreamTimeoutError()


async def iter_stream_events(
    response: httpx.Response,
    *,
    idle_timeout: Optional[float] = None,
    cancel_token: Optional[CancelToken] = None,
) -> AsyncIterator[StreamEvent]:
    """
    Decode ``response`` incrementally. Stops right after [DONE] without reading
    further; yields StreamDone("closed") if the body ends without the sentinel.
    A cancelled token ends the iteration with no further events.
    """
    decoder = SSEDecoder()
    chunks = response.aiter_bytes()
    try:
        while True:
            if cancel_token is not None and cancel_token.cancelled:
                logger.debug("chat stream cancelled by consumer")
                return
            chunk = await _read_chunk(chunks, idle_timeout, cancel_token)
            if chunk is _CANCELLED:
                logger.debug("chat stream cancelled while waiting for data")
                return
            if chunk is _EXHAUSTED:
                break
            for event in decoder.feed(chunk):  # type: ignore[arg-type]
                if cancel_token is not None and cancel_token.cancelled:
                    return
                yield event
                if isinstance(event, StreamDone):
                    return
        for event in decoder.close():
            yield event
    finally:
        aclose = getattr(chunks, "aclose", None)
        if aclose is not None:
            await aclose()


DeltaCallback = Callable[[str], Union[None, Awaitable[None]]]
DoneCallback = Callable[[], Union[None, Awaitable[None]]]


async def consume_stream(
    stream: AsyncIterator[StreamEvent],
    on_delta: DeltaCallback,
    on_done: DoneCallback,
) -> None:
    """Drive ``stream`` with the callback pair: one on_delta per fragment, on_done once."""
    async for event in stream:
        if isinstance(event, DeltaFrame):
            result = on_delta(event.content)
        else:
            result = on_done()
        if asyncio.iscoroutine(result):
            await result
