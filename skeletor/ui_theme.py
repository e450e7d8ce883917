"""Reporter theme definitions and selection helpers.

Themes are ANSI palettes for summary and preview output. Syntax highlighting
style for YAML output remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the reporter."""

    name: str
    reset: str
    heading: str
    dir: str
    file: str
    success: str
    warning: str
    tip: str
    dim: str
    count: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    heading="\033[1;38;5;81m",
    dir="\033[1;34m",
    file="\033[38;5;252m",
    success="\033[1;32m",
    warning="\033[1;33m",
    tip="\033[38;5;229m",
    dim="\033[2;38;5;250m",
    count="\033[1;38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    heading="\033[1;38;5;45m",
    dir="\033[1;38;5;45m",
    file="\033[38;5;153m",
    success="\033[1;38;5;42m",
    warning="\033[1;38;5;214m",
    tip="\033[38;5;117m",
    dim="\033[2;38;5;110m",
    count="\033[1;38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    heading="",
    dir="",
    file="",
    success="",
    warning="",
    tip="",
    dim="",
    count="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
