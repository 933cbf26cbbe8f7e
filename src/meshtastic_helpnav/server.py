"""HelpServer - serves the interactive command reference over mesh radio."""

import asyncio
import logging
from typing import Sequence

from .config import Config
from .core import ActiveSession, HelpOptions, SessionManager, SessionState, TextSplitter
from .errors import HelpNavError
from .help import help
from .interfaces import CommandDescriptor, InvocationContext, MessageTransport
from .transport import MeshMessenger

logger = logging.getLogger(__name__)

HELP_COMMANDS = {"help", "?", "h"}


class HelpServer:
    """Main server routing radio messages to help sessions.

    A node starts a session by sending ``help`` (or ``help <command>``).
    While the session runs, the node's replies drive the pager. Each node
    gets its own messenger and session; nodes share nothing.
    """

    def __init__(
        self,
        commands: Sequence[CommandDescriptor],
        transport: MessageTransport,
        config: Config | None = None,
        options: HelpOptions | None = None,
    ):
        """
        Initialize the help server.

        Args:
            commands: The command registry to document.
            transport: Transport for sending/receiving messages.
            config: Server configuration (uses defaults if None).
            options: Catalog options; defaults map categories through
                ``config.categories``.
        """
        self.commands = tuple(commands)
        self.transport = transport
        self.config = config or Config()
        self.options = options or HelpOptions(get_category=self._category_label)
        self.splitter = TextSplitter(max_size=self.config.max_message_size)
        self.session_manager = SessionManager()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._messengers: dict[str, MeshMessenger] = {}
        self._notes: set[asyncio.Task] = set()

        self.transport.on_message(self._on_radio_message)

    def _category_label(self, category: str | None) -> str | None:
        if category is None:
            return None
        return self.config.categories.get(category, category)

    def start(self) -> None:
        """Start the server on the running event loop."""
        logger.info("Starting help server...")
        self._loop = asyncio.get_running_loop()
        self.transport.connect()
        logger.info("Server started and listening for messages")

    async def stop(self) -> None:
        """Cancel running sessions and disconnect the transport."""
        logger.info("Stopping help server...")
        cancelled = await self.session_manager.cancel_all()
        if cancelled:
            logger.info(f"Cancelled {cancelled} help session(s)")
        self._messengers.clear()
        self.transport.disconnect()
        self._loop = None
        logger.info("Server stopped")

    def _on_radio_message(self, node_id: str, message: str) -> None:
        """Transport callback; may run on the radio reader thread."""
        if self._loop is None:
            logger.warning(f"[{node_id}] Dropping message: server not started")
            return
        self._loop.call_soon_threadsafe(self.handle_message, node_id, message)

    def handle_message(self, node_id: str, message: str) -> None:
        """
        Handle an incoming message from a node. Must run on the loop.

        Args:
            node_id: The sender's node ID.
            message: The message text.
        """
        logger.info(f"[{node_id}] Received: {message!r}")

        active = self.session_manager.get_session(node_id)
        if active is not None:
            messenger: MeshMessenger = active.messenger
            if not messenger.feed(message):
                logger.debug(f"[{node_id}] Reply not mapped to a control")
                self._send_note(messenger, messenger.hint())
            return

        words = message.strip().split()
        if not words or words[0].lower() not in HELP_COMMANDS:
            self._send_note(self._messenger_for(node_id), "Send 'help' for the command list")
            return

        command = words[1].lstrip(self.config.prefix) if len(words) > 1 else None
        self.start_session(node_id, command)

    def start_session(self, node_id: str, command: str | None = None) -> ActiveSession:
        """
        Start a help session for a node.

        Args:
            node_id: Target node ID.
            command: Optional command name for the detail view.

        Returns:
            The registered session.
        """
        messenger = self._messenger_for(node_id)
        ctx = InvocationContext(author_id=node_id, messenger=messenger, commands=self.commands)
        task = asyncio.get_running_loop().create_task(
            self._run_session(ctx, command), name=f"help:{node_id}"
        )
        session = ActiveSession(node_id=node_id, task=task, messenger=messenger)
        self.session_manager.add_session(session)
        logger.info(f"[{node_id}] Help session started")
        return session

    async def _run_session(self, ctx: InvocationContext, command: str | None) -> SessionState | None:
        try:
            return await help(
                ctx,
                command,
                prefix=self.config.prefix,
                options=self.options,
                timeout=self.config.session_timeout_seconds,
            )
        except HelpNavError as e:
            logger.error(f"[{ctx.author_id}] Error: {e}")
            await self._send_error(ctx.messenger, str(e))
            return SessionState.FAILED

    def _messenger_for(self, node_id: str) -> MeshMessenger:
        messenger = self._messengers.get(node_id)
        if messenger is None:
            messenger = MeshMessenger(
                self.transport,
                node_id,
                splitter=self.splitter,
                ack_timeout=self.config.ack_timeout_seconds,
            )
            self._messengers[node_id] = messenger
        return messenger

    def _send_note(self, messenger: MeshMessenger, text: str) -> None:
        task = asyncio.get_running_loop().create_task(self._deliver_note(messenger, text))
        self._notes.add(task)
        task.add_done_callback(self._notes.discard)

    async def _deliver_note(self, messenger: MeshMessenger, text: str) -> None:
        try:
            await messenger.send_note(text)
        except HelpNavError as e:
            logger.warning(f"[{messenger.node_id}] Note not delivered: {e}")

    async def _send_error(self, messenger: MeshMessenger, error: str) -> None:
        """Send error message to a node."""
        message = f"Error: {error}"
        if len(message) > self.config.max_message_size:
            # Truncate long error messages to fit
            max_error_len = self.config.max_message_size - len("Error: ...")
            message = f"Error: {error[:max_error_len]}..."
        try:
            await messenger.send_note(message)
        except HelpNavError as e:
            logger.warning(f"[{messenger.node_id}] Error report not delivered: {e}")
