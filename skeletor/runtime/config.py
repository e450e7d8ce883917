"""Persistent JSON user defaults.

Stores default ignore patterns, reporter theme, YAML highlight style and the
color preference. All access is defensive: malformed or missing config falls
back to built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..highlight import DEFAULT_STYLE
from ..ignore import PatternSource

APP_NAME = "skeletor"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_default_ignore_sources() -> list[PatternSource]:
    """Return configured default ignore patterns as file-sourced literals.

    They come from a file the user did not type on this command line, so an
    invalid entry is dropped with a warning rather than failing the run.
    """
    value = load_config().get("ignore_patterns")
    if not isinstance(value, list):
        return []
    return [
        PatternSource(item, origin=CONFIG_PATH)
        for item in value
        if isinstance(item, str) and item.strip()
    ]


def load_style_name() -> str:
    """Load the Pygments style used for YAML output."""
    value = load_config().get("style")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_STYLE
    return value.strip()


def load_theme_name() -> str | None:
    """Load persisted reporter theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_no_color() -> bool:
    """Return persisted color preference.

    Only explicit boolean values are accepted; any other type falls back to
    ``False``.
    """
    value = load_config().get("no_color")
    return bool(value) if isinstance(value, bool) else False
