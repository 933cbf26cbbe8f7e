"""Queue-backed event stream with an author filter and a fixed deadline."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from ..interfaces import ComponentEvent, EventStream

logger = logging.getLogger(__name__)


class QueueEventStream(EventStream):
    """Event stream fed through ``put()``.

    Only events from ``author_id`` are yielded. Iteration stops when the
    deadline passes, when ``close()`` is called, or after ``aclose()``.
    """

    def __init__(
        self,
        author_id: str,
        timeout: float,
        on_close: Callable[[QueueEventStream], None] | None = None,
    ):
        """
        Initialize the stream.

        Args:
            author_id: The only author whose events are delivered.
            timeout: Seconds from now until the stream ends.
            on_close: Called once when the stream is released.
        """
        self.author_id = author_id
        self._loop = asyncio.get_running_loop()
        self._deadline = self._loop.time() + timeout
        self._queue: asyncio.Queue[ComponentEvent | None] = asyncio.Queue()
        self._on_close = on_close
        self._timed_out = False
        self._finished = False
        self._released = False

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    @property
    def released(self) -> bool:
        """True once ``aclose()`` has run."""
        return self._released

    def put(self, event: ComponentEvent) -> None:
        """Offer an event to the stream."""
        if self._finished:
            logger.debug(f"Dropping event {event.custom_id!r}: stream finished")
            return
        if event.author_id != self.author_id:
            logger.debug(f"Dropping event from {event.author_id}: not the session author")
            return
        self._queue.put_nowait(event)

    def close(self) -> None:
        """End the stream once queued events are consumed."""
        self._queue.put_nowait(None)

    async def __anext__(self) -> ComponentEvent:
        if self._finished:
            raise StopAsyncIteration

        remaining = self._deadline - self._loop.time()
        if remaining <= 0:
            raise self._expire()

        try:
            event = await asyncio.wait_for(self._queue.get(), timeout=remaining)
        except asyncio.TimeoutError:
            raise self._expire() from None

        if event is None:
            self._finished = True
            raise StopAsyncIteration
        return event

    def _expire(self) -> StopAsyncIteration:
        logger.debug(f"Event stream for {self.author_id} reached its deadline")
        self._timed_out = True
        self._finished = True
        return StopAsyncIteration()

    async def aclose(self) -> None:
        if self._released:
            return
        self._released = True
        self._finished = True
        if self._on_close is not None:
            self._on_close(self)
