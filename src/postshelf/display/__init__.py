"""Display module for postshelf.

This module provides themed console output and the shared info displays.
"""

from postshelf.display.commands import (
    display_config,
    display_lint_report,
    display_posts,
    display_stats,
)
from postshelf.display.console import get_console, reset_console
from postshelf.display.theme import (
    THEMES,
    ColorPalette,
    Theme,
    get_current_theme,
    reset_theme,
    set_theme,
)

__all__ = [
    "display_config",
    "display_lint_report",
    "display_posts",
    "display_stats",
    "get_console",
    "reset_console",
    "ColorPalette",
    "Theme",
    "THEMES",
    "get_current_theme",
    "reset_theme",
    "set_theme",
]
