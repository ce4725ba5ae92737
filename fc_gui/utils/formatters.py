"""Formatting helpers for GUI display."""

from __future__ import annotations

from datetime import datetime, timezone

SORT_ARROWS = {"asc": "▲", "desc": "▼"}


def format_datetime(value: datetime | None, *, utc: bool = False) -> str:
    """Format a datetime for display."""
    if value is None:
        return "Unknown"
    if utc:
        value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%d %H:%M:%S UTC")
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_optional(value: object | None, fallback: str = "-") -> str:
    """Format optional values with a fallback string."""
    if value is None:
        return fallback
    return str(value)


def format_cell(value: object | None) -> str:
    """Format a rendered cell value as table text."""
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return format_optional(value, fallback="")


def format_header(label: str, direction: str | None, sortable: bool) -> str:
    """Column header text with a sort arrow for the active direction."""
    if not sortable:
        return label
    arrow = SORT_ARROWS.get(direction or "")
    return f"{label} {arrow}" if arrow else label
