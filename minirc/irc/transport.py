"""Connection transport: the read and write halves of one server link."""

from __future__ import annotations

import asyncio
import logging
import ssl

from ..constants import CONNECT_TIMEOUT, READ_LIMIT, SHUTDOWN_CLOSE_TIMEOUT
from ..errors.handling import handle_transport_error
from ..errors.internal import FormatError
from ..logs.logger import logger


async def read_capped_line(reader: asyncio.StreamReader) -> bytes | None:
    """Read one ``\\n`` terminated line, honouring the reader's limit.

    Returns the line with its terminator, ``b""`` at EOF (or the unterminated
    tail before it), and ``None`` when the line was longer than the limit.
    An over-long line is discarded up to and including its newline, so no
    fragment of it is ever returned as a line of its own.
    """
    try:
        return await reader.readuntil(b"\n")
    except asyncio.IncompleteReadError as e:
        return e.partial
    except asyncio.LimitOverrunError as e:
        consumed = e.consumed
    while True:
        await reader.readexactly(consumed)
        try:
            await reader.readuntil(b"\n")
        except asyncio.IncompleteReadError:
            return None
        except asyncio.LimitOverrunError as e:
            consumed = e.consumed
            continue
        return None


class Transport:
    """Line framing over an asyncio stream pair.

    The reader half belongs to the network reader task and the writer half to
    the router; nothing else touches them.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        peer: str = "",
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.peer = peer
        self.closed = False

    async def read_line(self) -> str | None:
        """Return the next line without its terminator, or ``None`` at EOF.

        Over-long lines are dropped and reading continues.

        Raises:
            NetworkError: If the connection fails while reading.
        """
        while True:
            data = await handle_transport_error(
                lambda: read_capped_line(self.reader), "read line"
            )
            if data is None:
                logger.log_event(
                    "transport",
                    "line_too_long",
                    level=logging.WARNING,
                    peer=self.peer,
                    limit=READ_LIMIT,
                )
                continue
            if not data:
                return None
            return data.decode("utf-8", errors="replace").rstrip("\r\n")

    async def write_line(self, text: str) -> None:
        """Encode ``text``, append CRLF and flush it to the socket.

        Raises:
            FormatError: If ``text`` cannot be encoded; nothing is written.
            NetworkError: If the write or drain fails.
        """
        try:
            payload = f"{text}\r\n".encode()
        except UnicodeEncodeError as e:
            raise FormatError(
                f"Cannot encode outbound line as UTF-8: {e.reason}",
                data={"line": text},
            ) from e

        async def _write() -> None:
            self.writer.write(payload)
            await self.writer.drain()

        await handle_transport_error(_write, "write line")

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.writer.close()
            await asyncio.wait_for(
                self.writer.wait_closed(), timeout=SHUTDOWN_CLOSE_TIMEOUT
            )
        except (OSError, TimeoutError) as e:
            logger.log_event(
                "transport",
                "close_error",
                level=logging.WARNING,
                peer=self.peer,
                error=str(e),
            )
        logger.log_event("transport", "closed", level=logging.DEBUG, peer=self.peer)


async def open_transport(
    host: str,
    port: int,
    *,
    use_tls: bool = False,
    timeout: float = CONNECT_TIMEOUT,
) -> Transport:
    """Connect to ``host:port`` and wrap the stream pair.

    Raises:
        NetworkError: If the connection cannot be established in time.
    """
    peer = f"{host}:{port}"
    ssl_context = ssl.create_default_context() if use_tls else None
    logger.log_event("transport", "connect_start", peer=peer, tls=use_tls)

    async def _open() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        return await asyncio.wait_for(
            asyncio.open_connection(host, port, ssl=ssl_context, limit=READ_LIMIT),
            timeout=timeout,
        )

    reader, writer = await handle_transport_error(_open, f"connect to {peer}")
    logger.log_event("transport", "connected", peer=peer, tls=use_tls)
    return Transport(reader, writer, peer=peer)


__all__ = ["Transport", "open_transport", "read_capped_line"]
