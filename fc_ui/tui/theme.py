from __future__ import annotations

from rich.markup import escape

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

SORT_MARKERS: dict[str, str] = {
    "asc": "↑",
    "desc": "↓",
}
UNSORTED_MARKER = "↕"
SELECTED_MARKER = "✔"

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}


def render_message(kind: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(kind, "{message}")
    return template.format(message=escape(message))
