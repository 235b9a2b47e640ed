"""Router / writer task.

Single consumer of the inbound queue and the only task that writes to the
socket. Session state lives here and nowhere else.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors.handling import log_error
from ..errors.internal import FormatError, SessionClosedError
from ..irc.codec import format_line, parse_line
from ..irc.messages import (
    Join,
    Nick,
    Ping,
    Privmsg,
    ProtocolMessage,
    Quit,
    Raw,
    User,
)
from ..logs.logger import logger
from .commands import (
    JoinChannel,
    QuitSession,
    SendMessage,
    SendRaw,
    SwitchChannel,
    Unknown,
    UserCommand,
)
from .events import CommandEnvelope, Envelope, InboundLine, KeepAlive, SessionEnd
from .state import SessionState

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import ClientConfig
    from ..irc.transport import Transport
    from .display import Console
    from .events import InboundQueue

NO_CHANNEL_NOTICE = "No channel currently selected."
UNKNOWN_COMMAND_NOTICE = "Unknown command or invalid usage."


def build_handshake(config: ClientConfig) -> list[ProtocolMessage]:
    """Registration lines sent once, right after connecting."""
    lines: list[ProtocolMessage] = []
    if config.password:
        lines.append(Raw(f"PASS {config.password}"))
    if config.capabilities:
        lines.append(Raw(f"CAP REQ :{' '.join(config.capabilities)}"))
    lines.append(Nick(config.nickname))
    lines.append(User(config.username or config.nickname, config.realname or ""))
    if config.capabilities:
        lines.append(Raw("CAP END"))
    return lines


class Router:
    def __init__(
        self,
        queue: InboundQueue,
        transport: Transport,
        console: Console,
        *,
        nickname: str = "",
        state: SessionState | None = None,
    ) -> None:
        self.queue = queue
        self.transport = transport
        self.console = console
        self.nickname = nickname
        self.state = state or SessionState()
        self.lines_sent = 0

    async def run(
        self,
        handshake: list[ProtocolMessage] | None = None,
        channels: list[str] | None = None,
    ) -> None:
        """Write the handshake, join initial channels, then route until the end."""
        for message in handshake or []:
            await self.send(message)
        for channel in channels or []:
            await self.route_command(JoinChannel(channel))
        while not self.state.ended:
            envelope = await self.queue.get()
            await self.dispatch(envelope)
        logger.log_event(
            "router",
            "stopped",
            level=logging.DEBUG,
            user=self.nickname,
            lines_sent=self.lines_sent,
        )

    async def dispatch(self, envelope: Envelope) -> None:
        if self.state.ended:
            raise SessionClosedError(
                "Session already ended", data={"envelope": repr(envelope)}
            )
        if isinstance(envelope, KeepAlive):
            await self.send(envelope.reply)
        elif isinstance(envelope, CommandEnvelope):
            await self.route_command(envelope.command)
        elif isinstance(envelope, InboundLine):
            self._show_inbound(envelope)
        elif isinstance(envelope, SessionEnd):
            self.state.end()
            logger.log_event(
                "session", "end", user=self.nickname, reason=envelope.reason
            )

    async def route_command(self, command: UserCommand) -> None:
        """Apply one command: at most one state change and one write."""
        if self.state.ended:
            raise SessionClosedError(
                "Session already ended", data={"command": repr(command)}
            )
        if isinstance(command, JoinChannel):
            await self._join(command.name)
        elif isinstance(command, SwitchChannel):
            if self.state.is_joined(command.name):
                self.state.focus(command.name)
                logger.log_event(
                    "router", "switch", user=self.nickname, channel=command.name
                )
            else:
                await self._join(command.name)
        elif isinstance(command, SendMessage):
            await self._send_to_current(command.text)
        elif isinstance(command, SendRaw):
            await self._send_raw(command.line)
        elif isinstance(command, QuitSession):
            await self.send(Quit(command.reason))
        elif isinstance(command, Unknown):
            logger.log_event(
                "router",
                "unknown_command",
                level=logging.DEBUG,
                user=self.nickname,
                line=command.line,
            )
            self.console.notice(UNKNOWN_COMMAND_NOTICE)

    async def _join(self, channel: str) -> None:
        try:
            message = Join(channel)
        except ValueError as e:
            log_error("Invalid channel name", e, context={"channel": channel})
            self.console.notice(f"Invalid channel name: {channel!r}")
            return
        self.state.join(channel)
        logger.log_event("router", "join", user=self.nickname, channel=channel)
        await self.send(message)

    async def _send_to_current(self, text: str) -> None:
        target = self.state.current_channel
        if target is None:
            logger.log_event(
                "router", "no_channel", level=logging.DEBUG, user=self.nickname
            )
            self.console.notice(NO_CHANNEL_NOTICE)
            return
        try:
            message = Privmsg(target, text)
        except ValueError as e:
            log_error("Cannot build channel message", e, context={"channel": target})
            return
        if await self.send(message):
            self.console.show_own_message(target, self.nickname, text)

    async def _send_raw(self, line: str) -> None:
        message = parse_line(line)
        if isinstance(message, Join):
            await self._join(message.channel)
            return
        await self.send(message)

    async def send(self, message: ProtocolMessage) -> bool:
        """Serialize and write one message.

        A message that cannot be serialized is logged and dropped; the session
        goes on. Transport failures propagate and end the session.

        Returns:
            True if the line was written.
        """
        try:
            line = format_line(message)
            await self.transport.write_line(line)
        except FormatError as e:
            log_error("Dropped outbound message", e, context=e.data)
            return False
        self.lines_sent += 1
        logger.log_event(
            "router",
            "sent",
            level=logging.DEBUG,
            user=self.nickname,
            line="PASS ***" if line.startswith("PASS ") else line,
        )
        return True

    def _show_inbound(self, envelope: InboundLine) -> None:
        if isinstance(envelope.message, Ping):
            logger.log_event(
                "router",
                "ping",
                level=logging.DEBUG,
                user=self.nickname,
                token=envelope.message.token,
            )
        self.console.show_inbound(envelope.line)


__all__ = [
    "NO_CHANNEL_NOTICE",
    "UNKNOWN_COMMAND_NOTICE",
    "Router",
    "build_handshake",
]
