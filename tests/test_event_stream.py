"""Tests for the QueueEventStream module."""

import asyncio

import pytest

from conftest import button
from meshtastic_helpnav.core.event_stream import QueueEventStream


async def drain(stream):
    return [event async for event in stream]


class TestQueueEventStream:
    """Tests for QueueEventStream."""

    @pytest.mark.asyncio
    async def test_yields_in_order_then_closes(self):
        """Events come out in the order they were put."""
        stream = QueueEventStream("!user", timeout=5)
        events = [button("hnav:1"), button("hnav:2")]
        for event in events:
            stream.put(event)
        stream.close()
        assert await drain(stream) == events
        assert stream.timed_out is False

    @pytest.mark.asyncio
    async def test_filters_other_authors(self):
        """Events from other users are dropped."""
        stream = QueueEventStream("!user", timeout=5)
        stream.put(button("hnav:1", author="!intruder"))
        mine = button("hnav:1")
        stream.put(mine)
        stream.close()
        assert await drain(stream) == [mine]

    @pytest.mark.asyncio
    async def test_times_out(self):
        """The stream ends at its deadline."""
        stream = QueueEventStream("!user", timeout=0.05)
        assert await drain(stream) == []
        assert stream.timed_out is True

    @pytest.mark.asyncio
    async def test_deadline_not_refreshed_by_events(self):
        """Events do not extend the deadline."""
        stream = QueueEventStream("!user", timeout=0.2)

        async def feed():
            for _ in range(3):
                await asyncio.sleep(0.05)
                stream.put(button("hnav:1"))
            await asyncio.sleep(0.3)
            stream.put(button("hnav:2"))

        feeder = asyncio.create_task(feed())
        received = await drain(stream)
        await feeder
        assert [e.custom_id for e in received] == ["hnav:1"] * 3
        assert stream.timed_out is True

    @pytest.mark.asyncio
    async def test_late_event_not_delivered(self):
        """A queued event is not delivered once the deadline passed."""
        stream = QueueEventStream("!user", timeout=0.01)
        await asyncio.sleep(0.05)
        stream.put(button("hnav:1"))
        assert await drain(stream) == []
        assert stream.timed_out

    @pytest.mark.asyncio
    async def test_aclose_runs_callback_once(self):
        """aclose releases once and stops iteration."""
        released = []
        stream = QueueEventStream("!user", timeout=5, on_close=released.append)
        await stream.aclose()
        await stream.aclose()
        assert released == [stream]
        assert stream.released
        assert await drain(stream) == []

    @pytest.mark.asyncio
    async def test_put_after_finish_dropped(self):
        """Events after the end are ignored."""
        stream = QueueEventStream("!user", timeout=5)
        stream.close()
        assert await drain(stream) == []
        stream.put(button("hnav:1"))
        assert await drain(stream) == []
