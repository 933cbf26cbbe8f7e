"""Pager - drives one help navigation session."""

import asyncio
import logging
from typing import Awaitable, TypeVar

from ..errors import EmptyCatalogError, HelpNavError, NavigationRangeError, RemoteOperationError
from ..interfaces import ComponentEvent, EventStream, Messenger
from .catalog import Page
from .nav_parser import (
    Cancel,
    JumpToPage,
    NavigationEvent,
    NavigationParser,
    NextPage,
    PreviousPage,
    SelectCategory,
)
from .session import Session, SessionState, Target
from .views import ViewRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 120.0


class Pager:
    """Navigation state machine over a fixed list of pages.

    Renders page 0 as a new message, then serves the author's events one
    at a time until cancel, timeout, exhaustion of the event source, or
    an error. Every accepted navigation edits that same message.
    """

    def __init__(
        self,
        pages: list[Page],
        messenger: Messenger,
        author_id: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the pager.

        Args:
            pages: The catalog; never mutated.
            messenger: Messaging collaborator.
            author_id: The only user whose events are served.
            timeout: Session lifetime in seconds, measured from start.
        """
        self.pages = pages
        self.messenger = messenger
        self.author_id = author_id
        self.timeout = timeout
        self.parser = NavigationParser()
        self.renderer = ViewRenderer()
        self.state = SessionState.INIT
        self.session: Session | None = None

    async def run(self) -> SessionState:
        """
        Run the session to completion.

        Returns:
            The terminal state: CANCELLED, TIMED_OUT or CLOSED.

        Raises:
            EmptyCatalogError: If there are no pages.
            HelpNavError: On malformed events, out-of-range targets or
                failed remote operations. The state is then FAILED.
        """
        if self.state is not SessionState.INIT:
            raise RuntimeError("A pager can only run once")

        if not self.pages:
            self.state = SessionState.FAILED
            raise EmptyCatalogError()

        loop = asyncio.get_running_loop()
        started_at = loop.time()
        stream: EventStream | None = None

        try:
            view = self.renderer.render_page(self.pages, 0)
            message = await self._remote("send", self.messenger.send_new(view))
            self.session = Session(
                index=0,
                target=Target(message=message),
                started_at=started_at,
                timeout=self.timeout,
            )
            self.state = SessionState.SHOWING
            logger.info(f"[{self.author_id}] Showing page 1/{len(self.pages)}")

            stream = self.messenger.subscribe(
                self.author_id, self.session.remaining(loop.time())
            )
            async for event in stream:
                if await self._handle(event):
                    return self.state

            self.state = SessionState.TIMED_OUT if stream.timed_out else SessionState.CLOSED
            logger.info(f"[{self.author_id}] Help session ended: {self.state.value}")
            return self.state

        except BaseException as e:
            self.state = SessionState.FAILED
            if isinstance(e, HelpNavError):
                logger.error(f"[{self.author_id}] Help session failed: {e}")
            raise
        finally:
            if stream is not None:
                await stream.aclose()

    async def _handle(self, event: ComponentEvent) -> bool:
        """
        Process one event fully.

        Returns:
            True if the session is over.
        """
        assert self.session is not None
        await self._remote("acknowledge", self.messenger.acknowledge(event))

        nav = self.parser.parse(event, self.session.index)
        logger.debug(f"[{self.author_id}] {event.custom_id} -> {nav.__class__.__name__}")

        if isinstance(nav, Cancel):
            target = self.session.target.via(event)
            await self._remote("delete", self.messenger.delete(target.message, target.event))
            self.state = SessionState.CANCELLED
            logger.info(f"[{self.author_id}] Help session cancelled")
            return True

        candidate = self._candidate(nav)
        if not 0 <= candidate < len(self.pages):
            raise NavigationRangeError(candidate, len(self.pages))

        view = self.renderer.render_page(self.pages, candidate)
        session = self.session.move_to(candidate, event)
        await self._remote(
            "edit",
            self.messenger.edit_in_place(session.target.message, view, session.target.event),
        )
        self.session = session
        logger.info(f"[{self.author_id}] Showing page {candidate + 1}/{len(self.pages)}")
        return False

    def _candidate(self, nav: NavigationEvent) -> int:
        assert self.session is not None
        if isinstance(nav, PreviousPage):
            return self.session.index - 1
        if isinstance(nav, NextPage):
            return self.session.index + 1
        if isinstance(nav, (SelectCategory, JumpToPage)):
            return nav.index
        raise TypeError(f"Unhandled navigation event: {nav!r}")

    async def _remote(self, operation: str, call: Awaitable[T]) -> T:
        """Await a messenger call, wrapping failures as RemoteOperationError."""
        try:
            return await call
        except RemoteOperationError:
            raise
        except Exception as e:
            raise RemoteOperationError(operation, str(e)) from e
