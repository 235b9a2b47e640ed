"""Human readable text for minirc log events.

Templates live in ``event_templates.json`` next to this module, grouped by
domain (``transport``, ``router``, ``network`` ...) and keyed by action. The
event logger looks them up as ``(domain, action)`` and formats them with the
event's keyword arguments.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

TEMPLATES_FILE = Path(__file__).with_name("event_templates.json")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        (domain, action): text
        for domain, actions in raw.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, text in actions.items()
        if isinstance(action, str) and isinstance(text, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Read the catalog at ``path`` (the packaged file by default).

    When the file is missing or unreadable the catalog holds a single
    ``("app", "load_error")`` entry and every other event falls back to text
    derived from its domain and action.
    """
    try:
        with (path or TEMPLATES_FILE).open("r", encoding="utf-8") as f:
            return _flatten(json.load(f))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates(path: Path | None = None) -> None:
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "TEMPLATES_FILE", "reload_event_templates"]
