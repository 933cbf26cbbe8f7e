"""Meshtastic-based message transport."""

import logging
import threading
from typing import Callable
from pubsub import pub

from meshtastic import serial_interface, tcp_interface, ble_interface

from ..interfaces import MessageTransport

logger = logging.getLogger(__name__)

TEXT_TOPIC = "meshtastic.receive.text"


class MeshtasticTransport(MessageTransport):
    """Message transport using Meshtastic mesh network.

    Supports Serial, BLE, and TCP connection types. Incoming text
    messages arrive on the meshtastic reader thread.
    """

    def __init__(self, connection_type: str = "serial", device: str | None = None):
        """
        Initialize the transport.

        Args:
            connection_type: Type of connection - "serial", "ble", or "tcp".
            device: Device path, BLE address, or hostname depending on type.
                   If None, will auto-detect for serial connections.
        """
        self.connection_type = connection_type
        self.device = device
        self._interface = None
        self._subscribed = False
        self._callbacks: list[Callable[[str, str], None]] = []

    def _require_interface(self):
        if self._interface is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._interface

    def send(self, node_id: str, message: str, want_ack: bool = False) -> None:
        """
        Send a text to a node without blocking for delivery.

        Used for notes outside the help view (reply hints, error reports).

        Raises:
            RuntimeError: If not connected.
        """
        self._require_interface().sendText(message, destinationId=node_id, wantAck=want_ack)

    def send_and_wait_for_ack(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """
        Send a message and wait for acknowledgment. No retry.

        Returns:
            True if ACK received, False if timeout or NAK.

        Raises:
            RuntimeError: If not connected.
        """
        interface = self._require_interface()

        done = threading.Event()
        outcome = {"acked": False}

        # Named 'onAckNak' so meshtastic library will call it for ACK/NAK responses
        def onAckNak(packet):
            routing = packet.get("decoded", {}).get("routing", {})
            error_reason = routing.get("errorReason", "NONE")
            if error_reason == "NONE":
                outcome["acked"] = True
                logger.debug(f"[{node_id}] ACK received")
            else:
                logger.warning(f"[{node_id}] NAK received: {error_reason}")
            done.set()

        interface.sendText(
            message,
            destinationId=node_id,
            wantAck=True,
            onResponse=onAckNak,
        )

        if not done.wait(timeout=timeout):
            logger.warning(f"[{node_id}] ACK timeout after {timeout}s")
            return False
        return outcome["acked"]

    def on_message(self, callback: Callable[[str, str], None]) -> None:
        """
        Register a callback for incoming messages.

        The callback receives (node_id, message_text).
        """
        self._callbacks.append(callback)

    def connect(self) -> None:
        """
        Connect to the Meshtastic device.

        Creates the appropriate interface based on connection_type.

        Raises:
            ValueError: For an unknown connection type.
        """
        if self.connection_type == "serial":
            self._interface = serial_interface.SerialInterface(devPath=self.device)
        elif self.connection_type == "ble":
            self._interface = ble_interface.BLEInterface(address=self.device)
        elif self.connection_type == "tcp":
            self._interface = tcp_interface.TCPInterface(hostname=self.device)
        else:
            raise ValueError(f"Unknown connection type: {self.connection_type}")

        pub.subscribe(self._handle_receive, TEXT_TOPIC)
        self._subscribed = True
        logger.info(f"Connected via {self.connection_type}")

    def disconnect(self) -> None:
        """Disconnect from the Meshtastic device."""
        if self._interface is None:
            return

        if self._subscribed:
            pub.unsubscribe(self._handle_receive, TEXT_TOPIC)
            self._subscribed = False

        self._interface.close()
        self._interface = None
        logger.info("Disconnected")

    def _handle_receive(self, packet: dict, interface) -> None:
        """
        Handle received packets from Meshtastic.

        Extracts text messages and calls registered callbacks. A failing
        callback is logged and does not stop the others.
        """
        from_id = packet.get("fromId")
        text = packet.get("decoded", {}).get("text")

        if not (from_id and text):
            return

        for callback in self._callbacks:
            try:
                callback(from_id, text)
            except Exception:
                logger.exception(f"[{from_id}] Message callback failed")
