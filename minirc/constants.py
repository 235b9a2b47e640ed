"""
Configuration constants for the minirc chat client

This module contains the tunables used by the session engine. Each constant
can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Connection defaults
DEFAULT_PORT = _get_env_int("DEFAULT_PORT", 6667)
DEFAULT_TLS_PORT = _get_env_int("DEFAULT_TLS_PORT", 6697)
CONNECT_TIMEOUT = _get_env_float("CONNECT_TIMEOUT", 10.0)

# Seconds without any inbound line before the link is considered dead.
# Servers ping every few minutes; 0 disables the check.
IDLE_READ_TIMEOUT = _get_env_float("IDLE_READ_TIMEOUT", 300.0)

# Upper bound on waiting for the writer to close at session end
SHUTDOWN_CLOSE_TIMEOUT = _get_env_float("SHUTDOWN_CLOSE_TIMEOUT", 5.0)

# Bounded inbound queue shared by the reader tasks (backpressure)
INBOUND_QUEUE_SIZE = _get_env_int("INBOUND_QUEUE_SIZE", 32)

# StreamReader buffer limit; longer lines are discarded
READ_LIMIT = _get_env_int("READ_LIMIT", 64 * 1024)

# Configuration file used when --config is not given
CONFIG_FILE_DEFAULT = os.environ.get("MINIRC_CONF_FILE", "minirc.json")

# Queue priorities (lower is served first)
PRIORITY_KEEPALIVE = 0
PRIORITY_NORMAL = 1
PRIORITY_SESSION_END = 2
