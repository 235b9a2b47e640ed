"""Concurrent message-routing engine.

Network reader and input reader feed one bounded queue; the router consumes
it, owns the session state and is the only writer on the connection.
"""

from .commands import (  # noqa: F401
    JoinChannel,
    QuitSession,
    SendMessage,
    SendRaw,
    SwitchChannel,
    Unknown,
    UserCommand,
    classify_input,
    parse_user_input,
)
from .display import Console  # noqa: F401
from .events import (  # noqa: F401
    CommandEnvelope,
    InboundLine,
    InboundQueue,
    KeepAlive,
    SessionEnd,
)
from .input_reader import InputReader, open_stdin_reader  # noqa: F401
from .network_reader import NetworkReader  # noqa: F401
from .router import Router, build_handshake  # noqa: F401
from .session import ChatSession  # noqa: F401
from .state import SessionState  # noqa: F401

__all__ = [
    "ChatSession",
    "CommandEnvelope",
    "Console",
    "InboundLine",
    "InboundQueue",
    "InputReader",
    "JoinChannel",
    "KeepAlive",
    "NetworkReader",
    "QuitSession",
    "Router",
    "SendMessage",
    "SendRaw",
    "SessionEnd",
    "SessionState",
    "SwitchChannel",
    "Unknown",
    "UserCommand",
    "build_handshake",
    "classify_input",
    "open_stdin_reader",
    "parse_user_input",
]
