"""Session state for one help navigation."""

from dataclasses import dataclass
from enum import Enum

from ..interfaces import ComponentEvent, MessageRef


class SessionState(Enum):
    """Lifecycle of a navigation session."""

    INIT = "init"
    SHOWING = "showing"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    CLOSED = "closed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self not in (SessionState.INIT, SessionState.SHOWING)


@dataclass(frozen=True)
class Target:
    """The message a session shows.

    ``message`` is fixed by the first render. ``event`` is the latest
    acknowledged event, through whose response later edits are issued.
    """

    message: MessageRef
    event: ComponentEvent | None = None

    def via(self, event: ComponentEvent) -> "Target":
        """Return the same target addressed through ``event``."""
        return Target(message=self.message, event=event)


@dataclass(frozen=True)
class Session:
    """Per-invocation navigation state (immutable)."""

    index: int
    target: Target
    started_at: float
    timeout: float

    @property
    def deadline(self) -> float:
        """Loop time after which no more events are served."""
        return self.started_at + self.timeout

    def remaining(self, now: float) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self.deadline - now)

    def move_to(self, index: int, event: ComponentEvent) -> "Session":
        """Return a new session showing ``index`` through ``event``."""
        return Session(
            index=index,
            target=self.target.via(event),
            started_at=self.started_at,
            timeout=self.timeout,
        )
