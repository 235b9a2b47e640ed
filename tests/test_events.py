"""
Tests for the inbound queue
"""

import asyncio

import pytest

from minirc.irc import Pong, Raw
from minirc.session import (
    CommandEnvelope,
    InboundLine,
    InboundQueue,
    KeepAlive,
    SendMessage,
    SessionEnd,
)


class TestInboundQueue:
    """Priority then arrival order"""

    @pytest.mark.asyncio
    async def test_fifo_within_priority(self):
        queue = InboundQueue()
        first = CommandEnvelope(SendMessage("one"))
        second = InboundLine("x", Raw("x"))
        third = CommandEnvelope(SendMessage("three"))
        for env in (first, second, third):
            await queue.put(env)
        assert [await queue.get() for _ in range(3)] == [first, second, third]

    @pytest.mark.asyncio
    async def test_priorities(self):
        queue = InboundQueue()
        end = SessionEnd("bye")
        normal = CommandEnvelope(SendMessage("hi"))
        keepalive = KeepAlive(Pong(":t"))
        await queue.put(end)
        await queue.put(normal)
        await queue.put(keepalive)
        assert await queue.get() == keepalive
        assert await queue.get() == normal
        assert await queue.get() == end
        assert queue.empty()

    @pytest.mark.asyncio
    async def test_bounded_put_suspends_producer(self):
        """Test producers wait instead of dropping when the queue is full"""
        queue = InboundQueue(maxsize=1)
        await queue.put(CommandEnvelope(SendMessage("a")))
        assert queue.full()

        blocked = asyncio.create_task(queue.put(CommandEnvelope(SendMessage("b"))))
        await asyncio.sleep(0.01)
        assert not blocked.done()

        assert (await queue.get()).command == SendMessage("a")
        await asyncio.wait_for(blocked, timeout=1.0)
        assert queue.qsize() == 1
