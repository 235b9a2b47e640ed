"""IRC wire layer.

Typed messages, the line codec, server line decomposition for display and
the stream transport.
"""

from .codec import format_line, parse_line  # noqa: F401
from .messages import (  # noqa: F401
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
from .parser import (  # noqa: F401
    ChannelMessage,
    ServerLine,
    channel_message,
    split_server_line,
)
from .transport import Transport, open_transport  # noqa: F401

__all__ = [
    "ChannelMessage",
    "Join",
    "Nick",
    "Ping",
    "Pong",
    "Privmsg",
    "ProtocolMessage",
    "Quit",
    "Raw",
    "ServerLine",
    "Transport",
    "User",
    "channel_message",
    "format_line",
    "open_transport",
    "parse_line",
    "split_server_line",
]
