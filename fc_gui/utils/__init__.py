"""Display helpers for Qt views."""

from fc_gui.utils.formatters import (
    format_cell,
    format_datetime,
    format_header,
    format_optional,
)

__all__ = [
    "format_cell",
    "format_datetime",
    "format_header",
    "format_optional",
]
