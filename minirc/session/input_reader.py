"""Input reader task: local user lines become routed commands."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from ..constants import READ_LIMIT
from ..irc.transport import read_capped_line
from ..logs.logger import logger
from .commands import classify_input
from .events import CommandEnvelope

if TYPE_CHECKING:  # pragma: no cover
    from .events import InboundQueue


async def open_stdin_reader() -> asyncio.StreamReader:
    """Wrap stdin in an ``asyncio.StreamReader``.

    Terminals and pipes are attached through a read pipe. Regular files
    (``minirc < commands.txt``) cannot be, so their content is read in a
    worker thread and fed to the reader followed by EOF.
    """
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=READ_LIMIT)
    protocol = asyncio.StreamReaderProtocol(reader)
    try:
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    except ValueError:
        data = await asyncio.to_thread(sys.stdin.buffer.read)
        logger.log_event("input", "file", level=logging.DEBUG, size=len(data))
        reader.feed_data(data)
        reader.feed_eof()
    return reader


class InputReader:
    """Reads user lines until the source is exhausted.

    EOF only stops this task; the session keeps running. Lines longer than
    the reader's limit are skipped.
    """

    def __init__(self, source: asyncio.StreamReader, queue: InboundQueue) -> None:
        self.source = source
        self.queue = queue
        self.commands_read = 0

    async def run(self) -> None:
        while True:
            data = await read_capped_line(self.source)
            if data is None:
                logger.log_event("input", "line_too_long", level=logging.WARNING)
                continue
            if not data:
                logger.log_event("input", "eof", level=logging.DEBUG)
                return
            line = data.decode("utf-8", errors="replace").rstrip("\r\n")
            command = classify_input(line)
            if command is None:
                continue
            self.commands_read += 1
            logger.log_event(
                "input",
                "command",
                level=logging.DEBUG,
                command=type(command).__name__,
            )
            await self.queue.put(CommandEnvelope(command))


__all__ = ["InputReader", "open_stdin_reader"]
