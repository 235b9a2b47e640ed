"""Local user commands and their parser."""

from __future__ import annotations

from dataclasses import dataclass

from ..irc.codec import parse_line
from ..irc.messages import Join


@dataclass(frozen=True, slots=True)
class JoinChannel:
    name: str


@dataclass(frozen=True, slots=True)
class SendMessage:
    text: str


@dataclass(frozen=True, slots=True)
class SwitchChannel:
    name: str


@dataclass(frozen=True, slots=True)
class SendRaw:
    line: str


@dataclass(frozen=True, slots=True)
class QuitSession:
    reason: str = ""


@dataclass(frozen=True, slots=True)
class Unknown:
    line: str = ""


UserCommand = JoinChannel | SendMessage | SwitchChannel | SendRaw | QuitSession | Unknown


def parse_user_input(line: str) -> UserCommand:
    """Parse one slash command typed by the user.

    ``/join``, ``/switch`` and ``/msg`` need at least one argument; ``/quit``
    takes an optional reason. Anything else is ``Unknown``.
    """
    parts = line.split()
    if not parts:
        return Unknown(line)
    command, args = parts[0], parts[1:]
    if command == "/quit":
        return QuitSession(" ".join(args))
    if not args:
        return Unknown(line)
    if command == "/join":
        return JoinChannel(args[0])
    if command == "/msg":
        return SendMessage(" ".join(args))
    if command == "/switch":
        return SwitchChannel(args[0])
    if command == "/raw":
        return SendRaw(" ".join(args))
    return Unknown(line)


def classify_input(line: str) -> UserCommand | None:
    """Turn a line of user input into a command, ``None`` for blank lines.

    Slash lines go through :func:`parse_user_input`. A bare ``JOIN <channel>``
    line is accepted as a join request.
    """
    if not line.strip():
        return None
    if line.lstrip().startswith("/"):
        return parse_user_input(line)
    message = parse_line(line)
    if isinstance(message, Join):
        return JoinChannel(message.channel)
    return Unknown(line)


__all__ = [
    "JoinChannel",
    "QuitSession",
    "SendMessage",
    "SendRaw",
    "SwitchChannel",
    "Unknown",
    "UserCommand",
    "classify_input",
    "parse_user_input",
]
