r"""
Logging configuration module for the minirc chat client.

Provides a clean, configurable logging setup using the colorlog library plus a
structured error helper. Logs go to stderr so they never mix with the chat
transcript printed on stdout.
"""

import logging
import os
import sys
from typing import Any

import colorlog


def _debug_enabled() -> bool:
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context.

    Args:
        error_type: Category of the error (e.g., 'network', 'format', 'config')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"

    if exception:
        structured_message += f" | Exception: {type(exception).__name__}: {str(exception)}"

    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.getLogger("minirc").log(level, structured_message)


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, config=None):
        """Initialize the configurator.

        Args:
            config: Optional dict; ``debug`` forces DEBUG level.
        """
        self.config = config or {}

    def level(self) -> int:
        if self.config.get("debug") or _debug_enabled():
            return logging.DEBUG
        return logging.INFO

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self) -> None:
        """Configure logging with colored output on stderr.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        """
        log_level = self.level()
        formatter = self.build_formatter()

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        logging.basicConfig(
            level=log_level,
            handlers=[handler],
            format="%(message)s",
            force=True,
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # asyncio reports unretrieved task exceptions at DEBUG noise otherwise
        logging.getLogger("asyncio").setLevel(logging.WARNING)
