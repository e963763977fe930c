"""Formatting helpers for display.

This module provides formatting utilities such as timestamp formatting.
"""

from datetime import datetime


def format_timestamp(dt: datetime) -> str:
    """Format a post date as ``YYYY-MM-DD HH:MM +HHMM`` in its own offset."""
    return dt.strftime("%Y-%m-%d %H:%M %z").strip()


def format_labels(labels: list[str], empty: str = "-") -> str:
    """Join labels for a table cell."""
    return ", ".join(labels) if labels else empty
