"""Integration tests for HelpServer."""

import asyncio

import pytest

from meshtastic_helpnav.config import Config
from meshtastic_helpnav.server import HelpServer


class MockTransport:
    """Mock transport for testing."""

    def __init__(self):
        self._callbacks = []
        self.sent_messages = []
        self.unacked = []
        self._connected = False

    def send(self, node_id: str, message: str, want_ack: bool = False) -> None:
        self.sent_messages.append((node_id, message))
        self.unacked.append((node_id, message))

    def send_and_wait_for_ack(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """Mock send - always acknowledged in tests."""
        self.sent_messages.append((node_id, message))
        return True

    def on_message(self, callback) -> None:
        self._callbacks.append(callback)

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    def simulate_message(self, node_id: str, message: str) -> None:
        """Simulate receiving a message."""
        for callback in self._callbacks:
            callback(node_id, message)

    def messages_to(self, node_id: str) -> list[str]:
        return [m for n, m in self.sent_messages if n == node_id]


async def settle(predicate, attempts: int = 300) -> None:
    """Let the loop run until predicate() holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0.01)
    raise AssertionError("condition not reached")


def listening(srv, node_id):
    session = srv.session_manager.get_session(node_id)
    return session is not None and session.messenger.listening


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def make_server(transport, sample_commands):
    def factory(commands=None, **config):
        return HelpServer(
            sample_commands if commands is None else commands,
            transport,
            Config(**config),
        )
    return factory


class TestHelpServerIntegration:
    """Integration tests for HelpServer."""

    @pytest.mark.asyncio
    async def test_help_shows_first_page(self, make_server, transport):
        """'help' starts a session on the first category."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))

        first = transport.messages_to("!node1")[0]
        assert first.startswith("[Uncategorized (Page 1)]")
        assert "/ping - Check latency" in first
        await srv.stop()

    @pytest.mark.asyncio
    async def test_navigate_and_close(self, make_server, transport):
        """Category jump, previous page, then close."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))

        transport.simulate_message("!node1", "3")
        await settle(lambda: transport.messages_to("!node1")[-1].startswith("[Mod (Page 3)]"))
        assert "[p=prev x=close #=category]" in transport.messages_to("!node1")[-1]

        transport.simulate_message("!node1", "p")
        await settle(lambda: transport.messages_to("!node1")[-1].startswith("[Fun (Page 2)]"))

        transport.simulate_message("!node1", "x")
        await settle(lambda: srv.session_manager.get_session("!node1") is None)
        assert transport.messages_to("!node1")[-1] == "Help closed."
        await srv.stop()

    @pytest.mark.asyncio
    async def test_unknown_reply_gets_hint(self, make_server, transport):
        """Replies that match no control get the key hint."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))

        transport.simulate_message("!node1", "p")
        await settle(lambda: transport.messages_to("!node1")[-1] == "[n=next x=close #=category]")
        assert listening(srv, "!node1")
        await srv.stop()

    @pytest.mark.asyncio
    async def test_help_for_command(self, make_server, transport):
        """'help /echo' sends the detail view and ends."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help /echo")
        await settle(lambda: transport.messages_to("!node1"))
        await settle(lambda: srv.session_manager.session_count() == 0)

        assert transport.messages_to("!node1") == [
            "[Help for echo]\nRepeat text\nParameters:\ntext - What to repeat"
        ]
        await srv.stop()

    @pytest.mark.asyncio
    async def test_help_for_unknown_command(self, make_server, transport):
        """Unknown commands get the not-found note."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "? nope")
        await settle(lambda: transport.messages_to("!node1"))
        assert transport.messages_to("!node1") == ["Command not found!"]
        await srv.stop()

    @pytest.mark.asyncio
    async def test_other_text_without_session(self, make_server, transport):
        """Messages outside a session point to help."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "hello")
        await settle(lambda: transport.messages_to("!node1"))
        assert transport.messages_to("!node1") == ["Send 'help' for the command list"]
        assert transport.unacked == [("!node1", "Send 'help' for the command list")]
        assert srv.session_manager.session_count() == 0
        await srv.stop()

    @pytest.mark.asyncio
    async def test_empty_registry_reports_error(self, make_server, transport):
        """An empty catalog is reported to the node."""
        srv = make_server(commands=[])
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: transport.messages_to("!node1"))
        assert transport.messages_to("!node1") == ["Error: No help message found"]
        await srv.stop()

    @pytest.mark.asyncio
    async def test_node_keeps_its_messenger(self, make_server, transport):
        """Sessions and notes for a node share one messenger."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))
        first = srv.session_manager.get_session("!node1").messenger

        transport.simulate_message("!node1", "x")
        await settle(lambda: srv.session_manager.session_count() == 0)
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))

        assert srv.session_manager.get_session("!node1").messenger is first
        await srv.stop()

    @pytest.mark.asyncio
    async def test_sessions_per_node_are_independent(self, make_server, transport):
        """Two nodes navigate separately."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help")
        transport.simulate_message("!node2", "help")
        await settle(lambda: listening(srv, "!node1") and listening(srv, "!node2"))

        transport.simulate_message("!node2", "n")
        await settle(lambda: transport.messages_to("!node2")[-1].startswith("[Fun (Page 2)]"))

        assert len(transport.messages_to("!node1")) == 1
        assert srv.session_manager.session_count() == 2
        await srv.stop()

    @pytest.mark.asyncio
    async def test_session_times_out(self, make_server, transport):
        """A stale session ends without another message."""
        srv = make_server(session_timeout_seconds=0.1)
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: srv.session_manager.get_session("!node1") is not None)
        await settle(lambda: srv.session_manager.get_session("!node1") is None)
        assert len(transport.messages_to("!node1")) == 1
        await srv.stop()

    @pytest.mark.asyncio
    async def test_categories_config_relabels(self, make_server, transport):
        """Config categories rename pages."""
        srv = make_server(categories={"Mod": "Moderation"})
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))
        assert "3. Moderation" in transport.messages_to("!node1")[0]
        await srv.stop()

    @pytest.mark.asyncio
    async def test_stop_cancels_sessions(self, make_server, transport):
        """stop cancels running sessions and disconnects."""
        srv = make_server()
        srv.start()
        transport.simulate_message("!node1", "help")
        await settle(lambda: listening(srv, "!node1"))
        await srv.stop()
        assert srv.session_manager.session_count() == 0
        assert transport._connected is False

    def test_message_before_start_dropped(self, make_server, transport):
        """Messages before start are ignored."""
        make_server()
        transport.simulate_message("!node1", "help")
        assert transport.sent_messages == []
