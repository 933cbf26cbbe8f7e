"""Pytest configuration and fixtures."""

import pytest

from meshtastic_helpnav.core import Page, QueueEventStream
from meshtastic_helpnav.interfaces import (
    CommandDescriptor,
    ComponentEvent,
    InvocationContext,
    MessageRef,
    Messenger,
    Parameter,
)


class FakeMessenger(Messenger):
    """Records every remote operation and replays scripted events."""

    def __init__(self, events=(), close_after=True, fail_on=()):
        self.events = list(events)
        self.close_after = close_after
        self.fail_on = set(fail_on)
        self.calls = []
        self.streams = []
        self._ids = 0

    def _record(self, op, *args):
        self.calls.append((op, *args))
        if op in self.fail_on:
            raise ConnectionError(f"{op} exploded")

    async def send_new(self, view):
        self._ids += 1
        ref = MessageRef(message_id=f"msg-{self._ids}")
        self._record("send", view, ref)
        return ref

    async def edit_in_place(self, message, view, event=None):
        self._record("edit", message, view, event)

    async def delete(self, message, event=None):
        self._record("delete", message, event)

    async def acknowledge(self, event):
        self._record("ack", event)

    def subscribe(self, author_id, timeout):
        stream = QueueEventStream(author_id, timeout)
        for event in self.events:
            stream.put(event)
        if self.close_after:
            stream.close()
        self.streams.append(stream)
        return stream

    def ops(self):
        """Operation names in call order."""
        return [call[0] for call in self.calls]

    def views(self, op):
        """Views passed to ``op`` ("send" or "edit")."""
        return [call[1] if op == "send" else call[2] for call in self.calls if call[0] == op]


def button(custom_id, author="!user"):
    return ComponentEvent(author_id=author, custom_id=custom_id)


def select(value, author="!user"):
    values = () if value is None else (value,)
    return ComponentEvent(author_id=author, custom_id="hnav:selectmenu", values=values, kind="select")


def allow():
    async def check(ctx):
        return True
    return check


def deny():
    async def check(ctx):
        return False
    return check


def explode():
    async def check(ctx):
        raise RuntimeError("check backend down")
    return check


@pytest.fixture
def sample_commands():
    """The ping/echo/ban registry."""
    return [
        CommandDescriptor(name="ping", description="Check latency"),
        CommandDescriptor(
            name="echo",
            description="Repeat text",
            category="Fun",
            parameters=(Parameter("text", "What to repeat"),),
        ),
        CommandDescriptor(name="ban", description="Ban a user", category="Mod"),
    ]


@pytest.fixture
def three_pages():
    return [
        Page("Uncategorized", "/ping - Check latency"),
        Page("Fun", "/echo - Repeat text"),
        Page("Mod", "/ban - Ban a user"),
    ]


@pytest.fixture
def make_ctx():
    """Factory for invocation contexts."""
    def factory(commands=(), author_id="!user", messenger=None):
        return InvocationContext(
            author_id=author_id,
            messenger=messenger or FakeMessenger(),
            commands=list(commands),
        )
    return factory
