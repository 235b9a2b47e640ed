"""Session state owned by the router task."""

from __future__ import annotations


class SessionState:
    """Joined channels and the focused channel.

    ``current_channel`` is ``None`` or one of ``joined_channels``. Channel
    names compare case-sensitively.
    """

    def __init__(self) -> None:
        self._joined: set[str] = set()
        self._current: str | None = None
        self.ended = False

    @property
    def joined_channels(self) -> frozenset[str]:
        return frozenset(self._joined)

    @property
    def current_channel(self) -> str | None:
        return self._current

    def is_joined(self, channel: str) -> bool:
        return channel in self._joined

    def join(self, channel: str) -> bool:
        """Record ``channel`` as joined and focus it.

        Returns:
            True if the channel was not joined before.
        """
        if not channel:
            raise ValueError("channel name must not be empty")
        added = channel not in self._joined
        self._joined.add(channel)
        self._current = channel
        return added

    def focus(self, channel: str) -> None:
        if channel not in self._joined:
            raise ValueError(f"cannot focus {channel!r}: not joined")
        self._current = channel

    def end(self) -> None:
        self.ended = True

    def snapshot(self) -> dict[str, object]:
        return {
            "joined_channels": sorted(self._joined),
            "current_channel": self._current,
            "ended": self.ended,
        }


__all__ = ["SessionState"]
