"""
Tests for the router / writer task
"""

import asyncio
from unittest.mock import patch

import pytest

from minirc.config import ClientConfig
from minirc.errors import NetworkError, SessionClosedError
from minirc.irc import Ping, Pong, Raw
from minirc.session import (
    CommandEnvelope,
    InboundLine,
    InboundQueue,
    JoinChannel,
    KeepAlive,
    QuitSession,
    Router,
    SendMessage,
    SendRaw,
    SessionEnd,
    SwitchChannel,
    Unknown,
    build_handshake,
)
from minirc.session.router import NO_CHANNEL_NOTICE, UNKNOWN_COMMAND_NOTICE


@pytest.fixture
def router(transport, console):
    return Router(InboundQueue(), transport, console, nickname="bot")


class TestRouteCommand:
    """State transitions and outbound effects"""

    @pytest.mark.asyncio
    async def test_join(self, router, transport):
        await router.route_command(JoinChannel("#a"))
        assert transport.written == ["JOIN #a"]
        assert router.state.current_channel == "#a"
        assert router.state.joined_channels == {"#a"}

    @pytest.mark.asyncio
    async def test_switch_to_joined_channel_is_local(self, router, transport):
        await router.route_command(JoinChannel("#a"))
        await router.route_command(JoinChannel("#b"))
        await router.route_command(SwitchChannel("#a"))
        assert transport.written == ["JOIN #a", "JOIN #b"]
        assert router.state.current_channel == "#a"

    @pytest.mark.asyncio
    async def test_switch_to_unknown_channel_joins(self, transport, console):
        """Test switch and join produce the same observable state"""
        via_switch = Router(InboundQueue(), transport, console)
        await via_switch.route_command(SwitchChannel("#a"))

        other = type(transport)()
        via_join = Router(InboundQueue(), other, console)
        await via_join.route_command(JoinChannel("#a"))

        assert transport.written == other.written == ["JOIN #a"]
        assert via_switch.state.snapshot() == via_join.state.snapshot()

    @pytest.mark.asyncio
    async def test_send_message_to_current_channel(self, router, transport, console):
        await router.route_command(JoinChannel("#general"))
        await router.route_command(SendMessage("hello there"))
        assert transport.written[-1] == "PRIVMSG #general :hello there"
        assert console.own == [("#general", "bot", "hello there")]

    @pytest.mark.asyncio
    async def test_send_message_without_channel(self, router, transport, console):
        """Test no write and one local notice without a focused channel"""
        await router.route_command(SendMessage("hi"))
        assert transport.written == []
        assert console.notices == [NO_CHANNEL_NOTICE]

    @pytest.mark.asyncio
    async def test_unknown_reports_locally(self, router, transport, console):
        await router.route_command(Unknown("what"))
        assert transport.written == []
        assert console.notices == [UNKNOWN_COMMAND_NOTICE]
        assert router.state.current_channel is None

    @pytest.mark.asyncio
    async def test_raw_passthrough(self, router, transport):
        await router.route_command(SendRaw("MODE #a +i"))
        assert transport.written == ["MODE #a +i"]

    @pytest.mark.asyncio
    async def test_raw_join_updates_state(self, router, transport):
        await router.route_command(SendRaw("JOIN #c"))
        assert transport.written == ["JOIN #c"]
        assert router.state.current_channel == "#c"

    @pytest.mark.asyncio
    async def test_quit(self, router, transport):
        await router.route_command(QuitSession("bye"))
        assert transport.written == ["QUIT :bye"]

    @pytest.mark.asyncio
    async def test_unsendable_message_is_dropped(self, router, transport, console):
        """Test a FormatError drops only that message"""
        await router.route_command(JoinChannel("#a"))
        await router.route_command(SendMessage("bad\x00text"))
        await router.route_command(SendMessage("fine"))
        assert transport.written == ["JOIN #a", "PRIVMSG #a :fine"]
        assert console.own == [("#a", "bot", "fine")]

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, router, transport):
        transport.fail_writes = True
        with pytest.raises(NetworkError):
            await router.route_command(JoinChannel("#a"))

    @pytest.mark.asyncio
    async def test_channel_invariant_holds(self, router):
        """Test current channel stays a joined channel across operations"""
        ops = [
            SwitchChannel("#x"),
            JoinChannel("#y"),
            SwitchChannel("#x"),
            SendMessage("hi"),
            SwitchChannel("#z"),
            JoinChannel("#y"),
            Unknown(""),
        ]
        for op in ops:
            await router.route_command(op)
            assert router.state.current_channel in router.state.joined_channels


class TestDispatch:
    """Envelope handling and queue ordering"""

    @pytest.mark.asyncio
    async def test_keepalive_written(self, router, transport):
        await router.dispatch(KeepAlive(Pong(":server1")))
        assert transport.written == ["PONG :server1"]

    @pytest.mark.asyncio
    async def test_inbound_line_displayed(self, router, transport, console):
        await router.dispatch(InboundLine("PING :x", Ping(":x")))
        await router.dispatch(InboundLine(":srv 001 bot :hi", Raw(":srv 001 bot :hi")))
        assert console.inbound == ["PING :x", ":srv 001 bot :hi"]
        assert transport.written == []

    @pytest.mark.asyncio
    async def test_session_end_is_terminal(self, router):
        await router.dispatch(SessionEnd("done"))
        assert router.state.ended is True
        with pytest.raises(SessionClosedError):
            await router.route_command(JoinChannel("#a"))
        with pytest.raises(SessionClosedError):
            await router.dispatch(KeepAlive(Pong("x")))

    @pytest.mark.asyncio
    async def test_pong_overtakes_queued_traffic(self, transport, console):
        """Test keep-alive replies jump ahead of ordinary queued envelopes"""
        queue = InboundQueue()
        router = Router(queue, transport, console)
        await queue.put(CommandEnvelope(JoinChannel("#a")))
        await queue.put(KeepAlive(Pong(":server1")))
        await queue.put(CommandEnvelope(JoinChannel("#b")))
        await queue.put(SessionEnd("test"))

        await router.run()

        assert transport.written == ["PONG :server1", "JOIN #a", "JOIN #b"]

    @pytest.mark.asyncio
    async def test_ordering_scenario(self, transport, console):
        """Test /join #a then /switch #b queued before either is processed"""
        queue = InboundQueue()
        router = Router(queue, transport, console)
        await queue.put(CommandEnvelope(JoinChannel("#a")))
        await queue.put(CommandEnvelope(SwitchChannel("#b")))
        await queue.put(SessionEnd())

        await router.run()

        assert transport.written == ["JOIN #a", "JOIN #b"]
        assert router.state.current_channel == "#b"
        assert router.state.joined_channels >= {"#a", "#b"}

    @pytest.mark.asyncio
    async def test_session_end_waits_for_queued_output(self, transport, console):
        """Test the end marker is served after everything queued before it"""
        queue = InboundQueue()
        router = Router(queue, transport, console)
        await queue.put(SessionEnd("closing"))
        await queue.put(CommandEnvelope(JoinChannel("#late")))

        await router.run()

        assert transport.written == ["JOIN #late"]


class TestStartup:
    """Handshake and initial channels"""

    @pytest.mark.asyncio
    async def test_handshake_then_initial_joins(self, transport, console, config):
        queue = InboundQueue()
        router = Router(queue, transport, console, nickname=config.nickname)
        queue.put_nowait(SessionEnd())

        await router.run(build_handshake(config), config.channels)

        assert transport.written == ["NICK bot", "USER bot 0 * :bot", "JOIN #general"]
        assert router.state.current_channel == "#general"

    @pytest.mark.asyncio
    async def test_last_initial_channel_is_focused(self, transport, console):
        queue = InboundQueue()
        router = Router(queue, transport, console)
        queue.put_nowait(SessionEnd())

        await router.run([], ["#a", "#b"])

        assert router.state.current_channel == "#b"
        assert router.state.joined_channels == {"#a", "#b"}

    def test_handshake_with_password_and_capabilities(self):
        config = ClientConfig(
            nickname="bot",
            username="botuser",
            realname="Bot Person",
            password="s3cret",
            server="irc.example.org",
            capabilities=["multi-prefix", "away-notify"],
        )
        lines = build_handshake(config)
        assert lines[0] == Raw("PASS s3cret")
        assert lines[1] == Raw("CAP REQ :multi-prefix away-notify")
        assert lines[-1] == Raw("CAP END")
        assert [type(m).__name__ for m in lines[2:4]] == ["Nick", "User"]
        assert lines[3].name == "botuser"
        assert lines[3].realname == "Bot Person"

    @pytest.mark.asyncio
    async def test_password_is_masked_in_logs(self, router):
        with patch("minirc.session.router.logger.log_event") as log_event:
            await router.send(Raw("PASS s3cret"))
        assert log_event.call_args.kwargs["line"] == "PASS ***"

    @pytest.mark.asyncio
    async def test_run_waits_on_empty_queue(self, router):
        """Test the router suspends until something is queued"""
        task = asyncio.create_task(router.run())
        await asyncio.sleep(0.01)
        assert not task.done()
        router.queue.put_nowait(SessionEnd())
        await asyncio.wait_for(task, timeout=1.0)
