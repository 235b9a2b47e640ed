"""Error hierarchy and error logging helpers."""

from .handling import handle_transport_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    FormatError,
    InternalError,
    NetworkError,
    SessionClosedError,
)

__all__ = [
    "ConfigError",
    "FormatError",
    "InternalError",
    "NetworkError",
    "SessionClosedError",
    "handle_transport_error",
    "log_error",
]
