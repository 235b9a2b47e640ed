"""Shared test doubles for the session engine."""

import asyncio

from minirc.errors import NetworkError


class FakeTransport:
    """In-memory stand-in for ``Transport``.

    Inbound lines are pushed with :meth:`push`; ``None`` means EOF and an
    exception instance is raised from ``read_line``. Written lines are
    recorded without the CRLF terminator.
    """

    def __init__(self) -> None:
        self.incoming: asyncio.Queue = asyncio.Queue()
        self.written: list[str] = []
        self.closed = False
        self.fail_writes = False
        self.peer = "fake:6667"

    def push(self, *lines):
        for line in lines:
            self.incoming.put_nowait(line)

    async def read_line(self):
        item = await self.incoming.get()
        if isinstance(item, Exception):
            raise item
        return item

    async def write_line(self, text: str) -> None:
        if self.fail_writes:
            raise NetworkError("Connection lost during write line")
        self.written.append(text)

    async def close(self) -> None:
        self.closed = True

    async def wait_for_lines(self, count: int, timeout: float = 1.0) -> None:
        async def _poll():
            while len(self.written) < count:
                await asyncio.sleep(0.001)

        await asyncio.wait_for(_poll(), timeout=timeout)


class RecordingConsole:
    def __init__(self) -> None:
        self.inbound: list[str] = []
        self.notices: list[str] = []
        self.own: list[tuple[str, str, str]] = []

    def show_inbound(self, line: str) -> None:
        self.inbound.append(line)

    def show_own_message(self, target: str, nickname: str, text: str) -> None:
        self.own.append((target, nickname, text))

    def notice(self, text: str) -> None:
        self.notices.append(text)


def make_source(data: str = "", *, eof: bool = True) -> asyncio.StreamReader:
    """Build a user input stream; must be called inside a running loop."""
    reader = asyncio.StreamReader()
    if data:
        reader.feed_data(data.encode("utf-8"))
    if eof:
        reader.feed_eof()
    return reader
