"""Centralized internal error hierarchy.

These exceptions give semantic categories to the failures the session engine
distinguishes. Raw ``OSError`` / ``UnicodeEncodeError`` from the transport are
wrapped before they leave ``minirc.irc.transport``.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport faults (connect, read, write). Session-fatal.
  FormatError          – A single outbound message cannot be serialized.
  ConfigError          – Configuration could not be loaded or validated.
  SessionClosedError   – Routing attempted after the session ended.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Connection refused, reset, read or write failures. These end the session;
    nothing in the client reconnects automatically.
    """


class FormatError(InternalError):
    """Exception raised when an outbound message cannot be put on the wire.

    Covers payloads that would break line framing (CR, LF, NUL) and text
    that cannot be encoded. Only the affected message is dropped.
    """


class ConfigError(InternalError):
    """Exception raised for unreadable or invalid configuration."""


class SessionClosedError(InternalError):
    """Exception raised when routing is attempted on an ended session."""


__all__ = [
    "InternalError",
    "NetworkError",
    "FormatError",
    "ConfigError",
    "SessionClosedError",
]
