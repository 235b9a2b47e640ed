"""Console output for the chat transcript and local notices."""

from __future__ import annotations

import sys
from typing import TextIO

from ..irc.parser import channel_message


class Console:
    """Writes the transcript to ``stream`` (stdout by default).

    Only the router calls into this, so lines never interleave.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def _write(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def show_inbound(self, line: str) -> None:
        msg = channel_message(line)
        if msg is not None:
            self._write(f"{msg.target} <{msg.author}> {msg.text}")
            return
        self._write(line)

    def show_own_message(self, target: str, nickname: str, text: str) -> None:
        self._write(f"{target} <{nickname}> {text}")

    def notice(self, text: str) -> None:
        self._write(f"-!- {text}")


__all__ = ["Console"]
