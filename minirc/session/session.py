"""Session supervision: wires the three tasks together and tears them down."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ..constants import IDLE_READ_TIMEOUT, INBOUND_QUEUE_SIZE
from ..logs.logger import logger
from .display import Console
from .events import InboundQueue, SessionEnd
from .input_reader import InputReader
from .network_reader import NetworkReader
from .router import Router, build_handshake
from .state import SessionState

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import ClientConfig
    from ..irc.transport import Transport


class ChatSession:
    """One connected client run.

    The session ends when the network reader finishes (EOF, read error or idle
    timeout) or the router fails. Queued output is written before the
    transport closes; the first real error is re-raised from :meth:`run`.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport,
        source: asyncio.StreamReader,
        *,
        console: Console | None = None,
        idle_timeout: float = IDLE_READ_TIMEOUT,
        queue_size: int = INBOUND_QUEUE_SIZE,
    ) -> None:
        self.config = config
        self.transport = transport
        self.queue = InboundQueue(queue_size)
        self.console = console or Console()
        self.router = Router(
            self.queue, transport, self.console, nickname=config.nickname
        )
        self.network_reader = NetworkReader(
            transport, self.queue, idle_timeout=idle_timeout, nickname=config.nickname
        )
        self.input_reader = InputReader(source, self.queue)
        self.tasks: list[asyncio.Task[Any]] = []
        self._stop_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> SessionState:
        return self.router.state

    async def run(self) -> None:
        router_task = asyncio.create_task(
            self.router.run(build_handshake(self.config), list(self.config.channels)),
            name="router",
        )
        network_task = asyncio.create_task(
            self.network_reader.run(), name="network-reader"
        )
        input_task = asyncio.create_task(self.input_reader.run(), name="input-reader")
        self.tasks = [router_task, network_task, input_task]
        logger.log_event(
            "session",
            "start",
            user=self.config.nickname,
            server=self.config.server,
            channels=len(self.config.channels),
        )
        try:
            done, _ = await asyncio.wait(
                {router_task, network_task}, return_when=asyncio.FIRST_COMPLETED
            )
            # Stop taking new work; let the router drain what is already queued.
            input_task.cancel()
            if router_task in done:
                network_task.cancel()
            else:
                await asyncio.wait({router_task})
        finally:
            for task in self.tasks:
                if not task.done():
                    task.cancel()
            results = await asyncio.gather(*self.tasks, return_exceptions=True)
            await self.transport.close()
            logger.log_event(
                "session",
                "closed",
                user=self.config.nickname,
                state=self.router.state.snapshot(),
            )
        self._raise_first_error(results)

    def _raise_first_error(self, results: list[Any]) -> None:
        for task, result in zip(self.tasks, results, strict=True):
            if isinstance(result, asyncio.CancelledError):
                continue
            if isinstance(result, BaseException):
                logger.log_event(
                    "session",
                    "task_failed",
                    level=logging.ERROR,
                    task=task.get_name(),
                    error=str(result),
                    error_type=type(result).__name__,
                )
                raise result

    async def stop(self, reason: str = "stop requested") -> None:
        """Stop reading and let the router write out what is queued."""
        for task in self.tasks[1:]:
            task.cancel()
        await self.queue.put(SessionEnd(reason))

    def request_stop(self) -> None:
        """Signal-handler friendly wrapper around :meth:`stop`."""
        if self._stop_task is None:
            self._stop_task = asyncio.get_running_loop().create_task(self.stop())


__all__ = ["ChatSession"]
