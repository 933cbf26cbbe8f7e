"""Messenger that shows help views as plain mesh text messages."""

from __future__ import annotations

import asyncio
import logging
from itertools import count

from ..core.event_stream import QueueEventStream
from ..core.text_splitter import TextSplitter
from ..core.views import HelpView
from ..errors import RemoteOperationError
from ..interfaces import ComponentEvent, MessageRef, MessageTransport, Messenger

logger = logging.getLogger(__name__)

PREVIOUS_KEYS = {"p", "prev", "previous"}
NEXT_KEYS = {"n", "next"}
CANCEL_KEYS = {"x", "c", "cancel", "close"}

CLOSED_TEXT = "Help closed."


class MeshMessenger(Messenger):
    """Messenger for one node over a text-only transport.

    Radio messages cannot be edited or deleted, so an edit re-sends the
    whole view and a delete sends a short closing note. Buttons and the
    category menu become reply keys; replies are mapped back onto the
    custom identifiers of the last view sent.

    Sends to the node never overlap: a note waits for a multi-part view
    already on the air, and the other way round.
    """

    def __init__(
        self,
        transport: MessageTransport,
        node_id: str,
        splitter: TextSplitter | None = None,
        ack_timeout: float = 30.0,
    ):
        """
        Initialize the messenger.

        Args:
            transport: Radio transport used for every send.
            node_id: The node this messenger talks to.
            splitter: Splits long views into mesh-sized messages.
            ack_timeout: Seconds to wait for each message's ACK.
        """
        self.transport = transport
        self.node_id = node_id
        self.splitter = splitter or TextSplitter()
        self.ack_timeout = ack_timeout
        self._message_ids = count(1)
        self._last_view: HelpView | None = None
        self._stream: QueueEventStream | None = None
        self._send_lock = asyncio.Lock()

    # Messenger operations

    async def send_new(self, view: HelpView) -> MessageRef:
        await self._transmit(self.render_text(view), "send")
        self._last_view = view
        return MessageRef(message_id=f"{self.node_id}:{next(self._message_ids)}", channel_id=self.node_id)

    async def edit_in_place(
        self, message: MessageRef, view: HelpView, event: ComponentEvent | None = None
    ) -> None:
        logger.debug(f"[{self.node_id}] Re-sending view for {message.message_id}")
        await self._transmit(self.render_text(view), "edit")
        self._last_view = view

    async def delete(self, message: MessageRef, event: ComponentEvent | None = None) -> None:
        logger.debug(f"[{self.node_id}] Closing {message.message_id}")
        self._last_view = None
        await self._transmit(CLOSED_TEXT, "delete")

    async def acknowledge(self, event: ComponentEvent) -> None:
        # Nothing to acknowledge on radio; the reply itself proves receipt
        logger.debug(f"[{self.node_id}] Received {event.custom_id}")

    def subscribe(self, author_id: str, timeout: float) -> QueueEventStream:
        if self._stream is not None:
            raise RuntimeError(f"Node {self.node_id} already has an open event stream")
        self._stream = QueueEventStream(author_id, timeout, on_close=self._release)
        return self._stream

    def _release(self, stream: QueueEventStream) -> None:
        if self._stream is stream:
            self._stream = None

    # Inbound replies

    @property
    def listening(self) -> bool:
        """True while an event stream is open."""
        return self._stream is not None

    def translate(self, text: str) -> ComponentEvent | None:
        """
        Map a reply onto a control of the last view.

        Returns None for unknown keys, disabled buttons, and category
        numbers outside the menu.
        """
        view = self._last_view
        if view is None:
            return None

        cleaned = text.strip().lower()
        if cleaned in CANCEL_KEYS:
            button = view.button("Cancel")
        elif cleaned in PREVIOUS_KEYS:
            button = view.button("Previous")
        elif cleaned in NEXT_KEYS:
            button = view.button("Next")
        else:
            return self._translate_category(view, cleaned)

        if button is None or button.disabled:
            return None
        return ComponentEvent(author_id=self.node_id, custom_id=button.custom_id)

    def _translate_category(self, view: HelpView, cleaned: str) -> ComponentEvent | None:
        if view.select is None:
            return None
        try:
            number = int(cleaned)
        except ValueError:
            return None
        if not 1 <= number <= len(view.select.options):
            return None
        option = view.select.options[number - 1]
        return ComponentEvent(
            author_id=self.node_id,
            custom_id=view.select.custom_id,
            values=(option.value,),
            kind="select",
        )

    def feed(self, text: str) -> bool:
        """
        Deliver a reply from the node to the open event stream.

        Returns:
            True if the reply became an event.
        """
        if self._stream is None:
            return False
        event = self.translate(text)
        if event is None:
            return False
        self._stream.put(event)
        return True

    def hint(self) -> str:
        """Reply keys valid for the last view."""
        if self._last_view is None:
            return "Send 'help' for the command list"
        return self._hints(self._last_view) or "No actions available"

    async def send_note(self, text: str) -> None:
        """
        Send a plain note outside the help view.

        Notes are fire-and-forget: no ACK is requested, so a lost note
        never fails the session.
        """
        parts = self.splitter.split(text)
        async with self._send_lock:
            for part in parts:
                try:
                    await asyncio.to_thread(self.transport.send, self.node_id, part)
                except Exception as e:
                    raise RemoteOperationError("note", str(e)) from e

    # Rendering

    def render_text(self, view: HelpView) -> str:
        """Render a view as plain text with reply hints."""
        lines = []
        if view.title:
            lines.append(f"[{view.title}]")
        if view.body:
            lines.append(view.body)
        for field in view.fields:
            lines.append(f"{field.name}:")
            if field.value:
                lines.append(field.value)

        if view.select is not None:
            lines.append("")
            for i, option in enumerate(view.select.options, 1):
                lines.append(f"{i}. {option.label}")

        hints = self._hints(view)
        if hints:
            lines.append("")
            lines.append(hints)

        return "\n".join(lines)

    def _hints(self, view: HelpView) -> str:
        keys = []
        previous = view.button("Previous")
        if previous is not None and not previous.disabled:
            keys.append("p=prev")
        following = view.button("Next")
        if following is not None and not following.disabled:
            keys.append("n=next")
        if view.button("Cancel") is not None:
            keys.append("x=close")
        if view.select is not None:
            keys.append("#=category")
        return f"[{' '.join(keys)}]" if keys else ""

    async def _transmit(self, text: str, operation: str) -> None:
        """Send every part of ``text`` and require an ACK for each."""
        parts = self.splitter.split(text)
        async with self._send_lock:
            logger.info(f"[{self.node_id}] Sending {len(parts)} message(s)")
            for i, part in enumerate(parts, 1):
                acked = await asyncio.to_thread(
                    self.transport.send_and_wait_for_ack, self.node_id, part, self.ack_timeout
                )
                if not acked:
                    raise RemoteOperationError(
                        operation, f"message {i}/{len(parts)} to {self.node_id} not acknowledged"
                    )
