"""Theme system for postshelf display.

This module defines color palettes and themes for the console display.
"""

from dataclasses import dataclass
from typing import Optional

ThemeName = str


@dataclass
class ColorPalette:
    """Color palette for a UI theme."""

    # Semantic colors
    primary: str = "cyan"
    success: str = "green"
    error: str = "red"
    warning: str = "yellow"
    info: str = "blue"
    muted: str = "dim"

    # UI-specific colors
    file_path: str = "cyan"
    title: str = "bold"
    tag: str = "green"
    category: str = "magenta"
    date: str = "blue"


@dataclass
class Theme:
    """A complete theme with palette."""

    name: ThemeName
    palette: ColorPalette


THEMES: dict[str, Theme] = {
    "default": Theme(
        name="default",
        palette=ColorPalette(),
    ),
    "light": Theme(
        name="light",
        palette=ColorPalette(
            primary="blue",
            warning="bright_yellow",
            muted="grey50",
            file_path="blue",
            category="dark_magenta",
        ),
    ),
    "minimal": Theme(
        name="minimal",
        palette=ColorPalette(
            primary="white",
            success="white",
            error="white",
            warning="white",
            info="white",
            muted="dim",
            file_path="white",
            title="white",
            tag="white",
            category="white",
            date="white",
        ),
    ),
}


_current_theme: Optional[Theme] = None


def set_theme(name: str) -> None:
    """Set the current theme by name; unknown names fall back to default."""
    global _current_theme
    _current_theme = THEMES.get(name, THEMES["default"])


def get_current_theme() -> Theme:
    """Get the current theme, loading from settings if needed."""
    if _current_theme is not None:
        return _current_theme

    from postshelf.config import get_settings

    set_theme(get_settings().theme)
    return _current_theme if _current_theme is not None else THEMES["default"]


def reset_theme() -> None:
    """Reset the current theme (call after changing settings)."""
    global _current_theme
    _current_theme = None
