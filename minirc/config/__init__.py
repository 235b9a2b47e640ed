"""Configuration package exports."""

from .loader import load_config, load_raw  # noqa: F401
from .model import ClientConfig  # noqa: F401

__all__ = ["ClientConfig", "load_config", "load_raw"]
