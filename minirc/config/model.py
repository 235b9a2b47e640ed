from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import DEFAULT_PORT, DEFAULT_TLS_PORT


def _normalize_channels(channels: list[str] | Any) -> list[str]:
    """Strip, drop blanks and de-duplicate while keeping order and case."""
    if not isinstance(channels, list):
        raise ValueError("channels must be a list")
    normalized: list[str] = []
    for ch in channels:
        if not isinstance(ch, str):
            continue
        stripped = ch.strip()
        if stripped:
            normalized.append(stripped)
    return list(dict.fromkeys(normalized))


class ClientConfig(BaseModel):
    """Connection and identity settings for one chat session.

    Attributes:
        nickname: Nickname sent with NICK and used for USER when no username.
        username: Optional username for the USER line.
        realname: Optional real name for the USER line.
        password: Optional server password sent with PASS.
        server: Host name of the server.
        port: TCP port; defaults depend on ``use_tls``.
        use_tls: Whether to wrap the connection in TLS.
        channels: Channels joined right after registration, in order.
        capabilities: Capabilities requested with CAP REQ during the handshake.
    """

    nickname: str = Field(min_length=1)
    username: str | None = None
    realname: str | None = None
    password: str | None = None
    server: str = Field(min_length=1)
    port: int | None = Field(default=None, ge=1, le=65535)
    use_tls: bool = False
    channels: list[str] = Field(default_factory=list)
    capabilities: list[str] = Field(default_factory=list)

    @field_validator("nickname", "username", "server", mode="before")
    @classmethod
    def validate_token(cls, v: Any) -> Any:
        """Trim and reject embedded whitespace in single-token fields."""
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("must be a string")
        stripped = v.strip()
        if any(ch.isspace() for ch in stripped):
            raise ValueError("must not contain whitespace")
        return stripped

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        channels = _normalize_channels(v)
        for ch in channels:
            if any(c.isspace() for c in ch):
                raise ValueError(f"channel name must not contain whitespace: {ch!r}")
        return channels

    @field_validator("capabilities", mode="before")
    @classmethod
    def validate_capabilities(cls, v: Any) -> list[str]:
        return _normalize_channels(v)

    @model_validator(mode="after")
    def default_port(self) -> ClientConfig:
        """Pick the conventional port when none was configured."""
        if self.port is None:
            self.port = DEFAULT_TLS_PORT if self.use_tls else DEFAULT_PORT
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Create ClientConfig from a dictionary, ignoring ``None`` values."""
        return cls.model_validate({k: v for k, v in data.items() if v is not None})
