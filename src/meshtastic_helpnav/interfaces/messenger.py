"""Abstract interface for the messaging collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING, AsyncIterator

if TYPE_CHECKING:
    from ..core.views import HelpView

_event_ids = count(1)


@dataclass(frozen=True)
class MessageRef:
    """Identity of a message sent by the navigator."""

    message_id: str
    channel_id: str | None = None


@dataclass(frozen=True)
class ComponentEvent:
    """A user activated a control carrying ``custom_id``.

    ``values`` holds the chosen option values for select controls.
    """

    author_id: str
    custom_id: str
    values: tuple[str, ...] = ()
    kind: str = "button"
    event_id: int = field(default_factory=lambda: next(_event_ids))


class EventStream(ABC):
    """A finite, non-restartable sequence of component events.

    The stream ends once its deadline passes or the source is exhausted.
    """

    def __aiter__(self) -> AsyncIterator[ComponentEvent]:
        return self

    @abstractmethod
    async def __anext__(self) -> ComponentEvent:
        """Wait for the next event or raise StopAsyncIteration."""
        pass

    @property
    @abstractmethod
    def timed_out(self) -> bool:
        """True if the stream ended because its deadline passed."""
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the subscription. Safe to call more than once."""
        pass


class Messenger(ABC):
    """Remote operations the navigator performs."""

    @abstractmethod
    async def send_new(self, view: HelpView) -> MessageRef:
        """Send a brand-new message and return its identity."""
        pass

    @abstractmethod
    async def edit_in_place(
        self, message: MessageRef, view: HelpView, event: ComponentEvent | None = None
    ) -> None:
        """Replace the content of ``message``.

        When ``event`` is given the edit goes through that event's
        response rather than through the channel.
        """
        pass

    @abstractmethod
    async def delete(
        self, message: MessageRef, event: ComponentEvent | None = None
    ) -> None:
        """Delete ``message`` (or the response tied to ``event``)."""
        pass

    @abstractmethod
    async def acknowledge(self, event: ComponentEvent) -> None:
        """Signal that ``event`` was received."""
        pass

    @abstractmethod
    def subscribe(self, author_id: str, timeout: float) -> EventStream:
        """Open an event stream for ``author_id`` lasting ``timeout`` seconds."""
        pass
