"""Typed protocol messages exchanged with the server."""

from __future__ import annotations

from dataclasses import dataclass, field


def _require_token(kind: str, value: str) -> None:
    if not value or any(ch.isspace() for ch in value):
        raise ValueError(f"{kind} must be a non-empty token without whitespace: {value!r}")


def _require_trimmed(kind: str, value: str) -> None:
    if value != value.strip():
        raise ValueError(f"{kind} must not start or end with whitespace: {value!r}")


@dataclass(frozen=True, slots=True)
class Raw:
    """A line the codec does not model, carried verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class Nick:
    name: str

    def __post_init__(self) -> None:
        _require_token("nickname", self.name)


@dataclass(frozen=True, slots=True)
class User:
    """Registration line; ``realname`` falls back to ``name``."""

    name: str
    realname: str = field(default="")

    def __post_init__(self) -> None:
        _require_token("username", self.name)
        if not self.realname:
            object.__setattr__(self, "realname", self.name)
        _require_trimmed("realname", self.realname)


@dataclass(frozen=True, slots=True)
class Join:
    channel: str

    def __post_init__(self) -> None:
        _require_token("channel", self.channel)


@dataclass(frozen=True, slots=True)
class Ping:
    token: str = ""

    def __post_init__(self) -> None:
        _require_trimmed("ping token", self.token)


@dataclass(frozen=True, slots=True)
class Pong:
    token: str = ""

    def __post_init__(self) -> None:
        _require_trimmed("pong token", self.token)


@dataclass(frozen=True, slots=True)
class Privmsg:
    target: str
    text: str

    def __post_init__(self) -> None:
        _require_token("message target", self.target)
        if self.text != self.text.rstrip():
            raise ValueError(f"message text must not end with whitespace: {self.text!r}")


@dataclass(frozen=True, slots=True)
class Quit:
    reason: str = ""

    def __post_init__(self) -> None:
        _require_trimmed("quit reason", self.reason)


ProtocolMessage = Raw | Nick | User | Join | Ping | Pong | Privmsg | Quit

__all__ = [
    "Join",
    "Nick",
    "Ping",
    "Pong",
    "Privmsg",
    "ProtocolMessage",
    "Quit",
    "Raw",
    "User",
]
