"""Network reader task: server lines in, keep-alive replies out."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..constants import IDLE_READ_TIMEOUT
from ..errors.internal import NetworkError
from ..irc.codec import parse_line
from ..irc.messages import Ping, Pong
from ..logs.logger import logger
from .events import InboundLine, KeepAlive, SessionEnd

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.transport import Transport
    from .events import InboundQueue


class NetworkReader:
    """Owns the read half of the transport.

    Ends the session by queueing ``SessionEnd`` when the stream closes, fails
    or stays silent longer than ``idle_timeout`` seconds (0 disables).
    """

    def __init__(
        self,
        transport: Transport,
        queue: InboundQueue,
        *,
        idle_timeout: float = IDLE_READ_TIMEOUT,
        nickname: str = "",
    ) -> None:
        self.transport = transport
        self.queue = queue
        self.idle_timeout = idle_timeout
        self.nickname = nickname
        self.lines_received = 0

    async def _next_line(self) -> str | None:
        if self.idle_timeout > 0:
            return await asyncio.wait_for(
                self.transport.read_line(), timeout=self.idle_timeout
            )
        return await self.transport.read_line()

    async def run(self) -> None:
        reason = "connection closed by server"
        try:
            while True:
                try:
                    line = await self._next_line()
                except TimeoutError:
                    reason = "no data from server"
                    logger.log_event(
                        "network",
                        "idle_timeout",
                        level=logging.WARNING,
                        user=self.nickname,
                        timeout=self.idle_timeout,
                    )
                    break
                if line is None:
                    logger.log_event(
                        "network", "eof", level=logging.WARNING, user=self.nickname
                    )
                    break
                await self.handle_line(line)
        except NetworkError as e:
            logger.log_event(
                "network",
                "read_error",
                level=logging.ERROR,
                user=self.nickname,
                error=str(e),
            )
            await self.queue.put(SessionEnd(f"read error: {e}"))
            raise
        await self.queue.put(SessionEnd(reason))

    async def handle_line(self, line: str) -> None:
        self.lines_received += 1
        message = parse_line(line)
        if isinstance(message, Ping):
            await self.queue.put(KeepAlive(Pong(message.token)))
        await self.queue.put(InboundLine(line, message))


__all__ = ["NetworkReader"]
