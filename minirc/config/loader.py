"""Configuration loading utilities."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import ClientConfig


def load_raw(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the JSON configuration object at ``path``.

    A missing file yields an empty mapping so command line options alone can
    configure a session.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.
    """
    file_path = Path(path)
    try:
        with file_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.log_event(
            "config", "file_missing", level=logging.DEBUG, path=str(file_path)
        )
        return {}
    except (OSError, ValueError) as e:
        raise ConfigError(
            f"Cannot read configuration file {file_path}: {e}",
            data={"path": str(file_path)},
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file {file_path} must contain a JSON object",
            data={"path": str(file_path)},
        )
    return data


def load_config(
    path: str | os.PathLike[str],
    overrides: Mapping[str, Any] | None = None,
) -> ClientConfig:
    """Load, merge and validate the client configuration.

    Args:
        path: JSON configuration file.
        overrides: Values from the command line; ``None`` entries are ignored.

    Raises:
        ConfigError: If the merged settings do not validate.
    """
    data = load_raw(path)
    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value
    try:
        config = ClientConfig.from_dict(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(
            f"Invalid configuration: {problems}", data={"path": str(path)}
        ) from e
    logger.log_event(
        "config",
        "loaded",
        user=config.nickname,
        server=config.server,
        port=config.port,
        tls=config.use_tls,
        channels=len(config.channels),
    )
    return config


__all__ = ["load_config", "load_raw"]
