"""Session manager for the help sessions of multiple nodes."""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ActiveSession:
    """A running help session and the objects it owns."""

    node_id: str
    task: asyncio.Task
    messenger: Any
    started: float = field(default_factory=time.time)


class SessionManager:
    """Tracks at most one running help session per node.

    Sessions share nothing with each other; each owns its messenger and
    task. Entries are removed when their task finishes.
    """

    def __init__(self):
        self._sessions: dict[str, ActiveSession] = {}

    def get_session(self, node_id: str) -> ActiveSession | None:
        """
        Get the running session for a node.

        Args:
            node_id: The Meshtastic node ID (e.g., "!abcd1234").

        Returns:
            The session, or None if the node has none.
        """
        return self._sessions.get(node_id)

    def add_session(self, session: ActiveSession) -> None:
        """
        Register a session and drop it again once its task is done.

        Raises:
            ValueError: If the node already has a running session.
        """
        if session.node_id in self._sessions:
            raise ValueError(f"Node {session.node_id} already has a help session")
        self._sessions[session.node_id] = session
        session.task.add_done_callback(lambda _task: self._discard(session))

    def remove_session(self, node_id: str) -> None:
        """
        Forget a node's session without touching its task.

        Args:
            node_id: The Meshtastic node ID.
        """
        self._sessions.pop(node_id, None)

    def _discard(self, session: ActiveSession) -> None:
        if self._sessions.get(session.node_id) is session:
            del self._sessions[session.node_id]

    async def cancel_all(self) -> int:
        """
        Cancel every running session and wait for them to finish.

        Returns:
            Number of sessions cancelled.
        """
        tasks = [s.task for s in self._sessions.values()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._sessions.clear()
        return len(tasks)

    def session_count(self) -> int:
        """Get the number of running sessions."""
        return len(self._sessions)

    def list_nodes(self) -> list[str]:
        """Get list of all node IDs with running sessions."""
        return list(self._sessions.keys())
