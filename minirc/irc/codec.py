"""Wire codec: text lines <-> typed protocol messages.

``parse_line`` is total over ``str``: anything it cannot model becomes
``Raw``. ``format_line`` never appends the CRLF terminator; the transport does.
"""

from __future__ import annotations

from collections.abc import Callable

from ..errors.internal import FormatError
from .messages import (
    Join,
    Nick,
    Ping,
    Pong,
    Privmsg,
    ProtocolMessage,
    Quit,
    Raw,
    User,
)

_FORBIDDEN = ("\r", "\n", "\x00")


def _strip_colon(value: str) -> str:
    return value[1:] if value.startswith(":") else value


def _parse_user(payload: str) -> User:
    head, sep, realname = payload.partition(" :")
    tokens = head.split()
    return User(tokens[0] if tokens else "", realname if sep else "")


def _parse_privmsg(payload: str) -> Privmsg:
    parts = payload.split(None, 1)
    if len(parts) < 2:
        raise ValueError("PRIVMSG without text")
    return Privmsg(parts[0], _strip_colon(parts[1]))


_PARSERS: dict[str, Callable[[str], ProtocolMessage]] = {
    "NICK": Nick,
    "USER": _parse_user,
    "JOIN": Join,
    "PING": Ping,
    "PONG": Pong,
    "PRIVMSG": _parse_privmsg,
    "QUIT": lambda payload: Quit(_strip_colon(payload)),
}


def parse_line(line: str) -> ProtocolMessage:
    """Classify a single line by its leading keyword.

    Keyword matching is case-sensitive. Payloads that do not form a valid
    message (empty names, stray whitespace, missing text) degrade to ``Raw``.
    """
    text = line.strip()
    parts = text.split(None, 1)
    parser = _PARSERS.get(parts[0]) if parts else None
    if parser is None:
        return Raw(text)
    try:
        return parser(parts[1] if len(parts) > 1 else "")
    except ValueError:
        return Raw(text)


def _render(msg: ProtocolMessage) -> str:
    if isinstance(msg, Raw):
        return msg.text
    if isinstance(msg, Nick):
        return f"NICK {msg.name}"
    if isinstance(msg, User):
        return f"USER {msg.name} 0 * :{msg.realname}"
    if isinstance(msg, Join):
        return f"JOIN {msg.channel}"
    if isinstance(msg, Ping):
        return f"PING {msg.token}" if msg.token else "PING"
    if isinstance(msg, Pong):
        return f"PONG {msg.token}" if msg.token else "PONG"
    if isinstance(msg, Privmsg):
        return f"PRIVMSG {msg.target} :{msg.text}"
    if isinstance(msg, Quit):
        return f"QUIT :{msg.reason}" if msg.reason else "QUIT"
    raise FormatError(
        f"Unsupported message type {type(msg).__name__}",
        data={"message": repr(msg)},
    )


def format_line(msg: ProtocolMessage) -> str:
    """Render ``msg`` in wire form without the line terminator.

    Raises:
        FormatError: If the rendered text would break line framing.
    """
    rendered = _render(msg)
    if any(ch in rendered for ch in _FORBIDDEN):
        raise FormatError(
            "Message contains line breaks or NUL and cannot be sent as one line",
            data={"message": repr(msg)},
        )
    return rendered


__all__ = ["format_line", "parse_line"]
