"""minirc - a minimal interactive IRC client built on asyncio."""

__version__ = "0.1.0"
