#!/usr/bin/env python3
"""
Main entry point for the minirc chat client
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from collections.abc import Sequence
from typing import Any

from .config import ClientConfig, load_config
from .constants import CONFIG_FILE_DEFAULT
from .errors.handling import log_error
from .errors.internal import ConfigError, NetworkError
from .irc.transport import open_transport
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .session import ChatSession, open_stdin_reader


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minirc", description="Minimal interactive IRC client"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE_DEFAULT,
        help=f"JSON configuration file (default: {CONFIG_FILE_DEFAULT})",
    )
    parser.add_argument("--nick", dest="nickname", help="nickname to register")
    parser.add_argument("--server", help="server host name")
    parser.add_argument("--port", type=int, help="server port")
    parser.add_argument(
        "--tls",
        dest="use_tls",
        action="store_true",
        default=None,
        help="connect with TLS",
    )
    parser.add_argument(
        "--channel",
        dest="channels",
        action="append",
        metavar="CHANNEL",
        help="channel to join on connect (repeatable)",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "nickname": args.nickname,
        "server": args.server,
        "port": args.port,
        "use_tls": args.use_tls,
        "channels": args.channels,
    }


def _install_signal_handlers(session: ChatSession) -> None:  # pragma: no cover
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, session.request_stop)
        except (NotImplementedError, RuntimeError):
            # Platforms without loop signal support fall back to KeyboardInterrupt
            pass


async def run_session(config: ClientConfig) -> None:
    """Attach stdin, connect, then run one session until it closes."""
    source = await open_stdin_reader()
    transport = await open_transport(
        config.server, config.port or 0, use_tls=config.use_tls
    )
    session = ChatSession(config, transport, source)
    _install_signal_handlers(session)
    await session.run()


async def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, load configuration and run the client.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    LoggerConfigurator({"debug": args.debug}).configure()
    try:
        config = load_config(args.config, overrides_from_args(args))
    except ConfigError as e:
        log_error("Configuration error", e)
        return 1
    try:
        await run_session(config)
    except NetworkError as e:
        log_error("Connection error", e, context={"server": config.server})
        return 1
    finally:
        logger.log_event("app", "shutdown")
    return 0


def run() -> None:
    """Synchronous entry point for the application."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    run()
