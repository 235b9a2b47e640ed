"""Server line decomposition used for the transcript.

The wire codec only classifies by leading keyword; lines coming from a server
usually start with a ``:prefix`` and are shown to the user through this
richer split instead. Message tags are skipped, nothing displays them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServerLine:
    prefix: str | None
    command: str | None
    params: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ChannelMessage:
    author: str
    target: str
    text: str


def split_server_line(line: str) -> ServerLine:
    """Split ``[@tags] [:prefix] COMMAND params [:trailing]``."""
    rest = line
    if rest.startswith("@"):
        rest = rest.partition(" ")[2]

    prefix: str | None = None
    if rest.startswith(":"):
        prefix, _, rest = rest[1:].partition(" ")

    head, sep, trailing = rest.partition(" :")
    words = head.split()
    if not words:
        return ServerLine(prefix, None, ())
    params = words[1:] + [trailing] if sep else words[1:]
    return ServerLine(prefix, words[0], tuple(params))


def channel_message(line: str) -> ChannelMessage | None:
    """Return the author/target/text view of a PRIVMSG line, else ``None``."""
    parsed = split_server_line(line)
    if parsed.command != "PRIVMSG" or len(parsed.params) < 2:
        return None
    # nick!user@host
    author = (parsed.prefix or "?").split("!", 1)[0]
    return ChannelMessage(author, parsed.params[0], " ".join(parsed.params[1:]))


__all__ = ["ChannelMessage", "ServerLine", "channel_message", "split_server_line"]
