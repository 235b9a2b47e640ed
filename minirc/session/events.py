"""Envelopes carried on the shared inbound queue."""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from typing import ClassVar

from ..constants import (
    INBOUND_QUEUE_SIZE,
    PRIORITY_KEEPALIVE,
    PRIORITY_NORMAL,
    PRIORITY_SESSION_END,
)
from ..irc.messages import Pong, ProtocolMessage
from .commands import UserCommand


@dataclass(frozen=True, slots=True)
class CommandEnvelope:
    priority: ClassVar[int] = PRIORITY_NORMAL
    command: UserCommand


@dataclass(frozen=True, slots=True)
class KeepAlive:
    """A keep-alive reply that must be written ahead of ordinary traffic."""

    priority: ClassVar[int] = PRIORITY_KEEPALIVE
    reply: Pong


@dataclass(frozen=True, slots=True)
class InboundLine:
    priority: ClassVar[int] = PRIORITY_NORMAL
    line: str
    message: ProtocolMessage


@dataclass(frozen=True, slots=True)
class SessionEnd:
    """Marks the end of the session; queued behind everything else."""

    priority: ClassVar[int] = PRIORITY_SESSION_END
    reason: str = ""


Envelope = CommandEnvelope | KeepAlive | InboundLine | SessionEnd


class InboundQueue:
    """Bounded fan-in queue consumed by the router.

    Entries are served by priority, then in arrival order. Producers suspend
    while the queue is full.
    """

    def __init__(self, maxsize: int = INBOUND_QUEUE_SIZE) -> None:
        self._queue: asyncio.PriorityQueue[tuple[int, int, Envelope]] = (
            asyncio.PriorityQueue(maxsize)
        )
        self._sequence = itertools.count()

    def _entry(self, envelope: Envelope) -> tuple[int, int, Envelope]:
        return (envelope.priority, next(self._sequence), envelope)

    async def put(self, envelope: Envelope) -> None:
        await self._queue.put(self._entry(envelope))

    def put_nowait(self, envelope: Envelope) -> None:
        self._queue.put_nowait(self._entry(envelope))

    async def get(self) -> Envelope:
        _, _, envelope = await self._queue.get()
        self._queue.task_done()
        return envelope

    def qsize(self) -> int:
        return self._queue.qsize()

    def full(self) -> bool:
        return self._queue.full()

    def empty(self) -> bool:
        return self._queue.empty()


__all__ = [
    "CommandEnvelope",
    "Envelope",
    "InboundLine",
    "InboundQueue",
    "KeepAlive",
    "SessionEnd",
]
