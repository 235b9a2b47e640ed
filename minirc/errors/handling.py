from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    FormatError,
    InternalError,
    NetworkError,
    SessionClosedError,
)


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The exception is mapped to a coarse category so repeated failures of the
    same kind line up in the log.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    error_type = "unknown"
    if isinstance(error, NetworkError | OSError | ConnectionError):
        error_type = "network"
    elif isinstance(error, FormatError | UnicodeError):
        error_type = "format"
    elif isinstance(error, ConfigError):
        error_type = "config"
    elif isinstance(error, SessionClosedError):
        error_type = "session"
    elif isinstance(error, InternalError):
        error_type = "internal"

    log_structured_error(
        error_type=error_type,
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


T = TypeVar("T")


async def handle_transport_error(
    operation: Callable[[], Awaitable[T]], context: str
) -> T:
    """Run a transport operation and translate OS level failures.

    Args:
        operation: The async transport operation to execute.
        context: Descriptive context for the operation (e.g., "write line").

    Returns:
        The result of the operation if successful.

    Raises:
        NetworkError: On timeouts, resets and other socket errors.
    """
    try:
        return await operation()
    except asyncio.CancelledError:
        raise
    except TimeoutError as e:
        raise NetworkError(
            f"Timed out during {context}. The server did not respond in time.",
            data={"operation": context},
        ) from e
    except ConnectionError as e:
        raise NetworkError(
            f"Connection lost during {context}. The server closed or reset the link. Error: {str(e)}",
            data={"operation": context},
        ) from e
    except OSError as e:
        raise NetworkError(
            f"Network error during {context}. Check host, port and TLS settings. Error: {str(e)}",
            data={"operation": context},
        ) from e


__all__ = ["log_error", "handle_transport_error"]
