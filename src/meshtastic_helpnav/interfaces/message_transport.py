"""Abstract interface for the radio-level text transport."""

from abc import ABC, abstractmethod
from typing import Callable


class MessageTransport(ABC):
    """Abstract interface for sending/receiving plain text messages."""

    @abstractmethod
    def send(self, node_id: str, message: str, want_ack: bool = False) -> None:
        """Send a message without waiting for delivery (fire-and-forget).

        Args:
            node_id: The destination node ID.
            message: The message text to send.
            want_ack: Ask the radio to retry until acknowledged; the
                caller still does not wait.
        """
        pass

    @abstractmethod
    def send_and_wait_for_ack(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """Send a message and block until it is acknowledged.

        Args:
            node_id: The destination node ID.
            message: The message text to send.
            timeout: Maximum seconds to wait for the ACK.

        Returns:
            True if the ACK arrived, False on NAK or timeout.
        """
        pass

    @abstractmethod
    def on_message(self, callback: Callable[[str, str], None]) -> None:
        """Register a callback for incoming messages.

        The callback receives (node_id, message).
        """
        pass

    @abstractmethod
    def connect(self) -> None:
        """Connect to the transport."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the transport."""
        pass
