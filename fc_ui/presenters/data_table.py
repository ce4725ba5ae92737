"""Presenter for data table snapshots."""

from __future__ import annotations

from datetime import datetime

from fc_app.api import DataTableOptions, DataTableSnapshot
from fc_ui.tui import theme
from fc_ui.tui.models import TableModel


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    return str(value)


def _header(label: str, sortable: bool, direction: str | None) -> str:
    if not sortable:
        return label
    marker = theme.SORT_MARKERS.get(direction or "", theme.UNSORTED_MARKER)
    return f"{label} {marker}"


def build_data_table_model(
    snapshot: DataTableSnapshot,
    options: DataTableOptions,
    *,
    title: str = "Data",
) -> TableModel:
    """Transform a table snapshot into a TableModel for the current page."""
    columns = [
        _header(col.label, col.sortable, snapshot.sort_indicator(col.key))
        for col in snapshot.visible_column_defs
    ]
    if options.show_selection:
        columns.insert(0, theme.SELECTED_MARKER)

    rows: list[list[str]] = []
    for row, row_id in zip(snapshot.display_rows, snapshot.display_row_ids):
        cells = [_cell_text(snapshot.cell(col, row)) for col in snapshot.visible_column_defs]
        if options.show_selection:
            cells.insert(0, theme.SELECTED_MARKER if snapshot.is_selected(row_id) else "")
        rows.append(cells)

    caption = ""
    if snapshot.pagination_visible:
        page = snapshot.pagination
        caption = (
            f"{page.range_label()} · Page {page.current_page} of {page.total_pages}"
            f" · {page.page_size} per page"
        )
    return TableModel(title=title, columns=columns, rows=rows, caption=caption)


def selection_summary(snapshot: DataTableSnapshot) -> str:
    count = len(snapshot.selected_ids)
    if count == 0:
        return "No rows selected"
    noun = "row" if count == 1 else "rows"
    return f"{count} {noun} selected: {', '.join(snapshot.selected_ids)}"
