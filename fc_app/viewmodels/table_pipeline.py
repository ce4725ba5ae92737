"""Pure filter → sort → paginate pipeline for the data table (UI-agnostic)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Number
from typing import Any, Iterable, Sequence

from fc_app.viewmodels.table_models import (
    MISSING,
    ColumnDef,
    FieldAccessor,
    PaginationState,
    SortConfig,
    TableSource,
    TableState,
    get_field,
)

UNDEFINED_ROW_ID = "undefined"


@dataclass(frozen=True)
class TableView:
    """Everything derived from one (state, source) pair."""

    ordered_rows: list[Any]
    display_rows: list[Any]
    display_row_ids: list[str]
    pagination: PaginationState
    visible_columns: list[ColumnDef]
    is_all_selected: bool


def is_missing(value: Any) -> bool:
    if value is MISSING or value is None:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def resolve_row_id(
    row: Any, row_id_key: str, accessor: FieldAccessor = get_field
) -> str:
    """Coerce the row identifier to a string, never raising."""
    value = accessor(row, row_id_key)
    if value is MISSING:
        return UNDEFINED_ROW_ID
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_query(query: str | None) -> str:
    return (query or "").strip().casefold()


def _search_text(value: Any) -> str | None:
    if value is MISSING or value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        # integral floats match as integers: 1.0 -> "1"
        return str(int(value))
    return str(value).casefold()


def _row_matches(
    row: Any, needle: str, search_keys: Sequence[str], accessor: FieldAccessor
) -> bool:
    for key in search_keys:
        text = _search_text(accessor(row, key))
        if text is not None and needle in text:
            return True
    return False


def filter_rows(
    rows: Iterable[Any],
    query: str | None,
    search_keys: Sequence[str],
    accessor: FieldAccessor = get_field,
) -> list[Any]:
    """Keep rows where any search field contains the query (case-insensitive)."""
    needle = normalize_query(query)
    if not needle or not search_keys:
        return list(rows)
    return [row for row in rows if _row_matches(row, needle, search_keys, accessor)]


def _sort_key(value: Any) -> tuple[int, Any]:
    # numbers < strings < anything else
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, Number) and not isinstance(value, complex):
        return (0, value)
    if isinstance(value, str):
        return (1, value.casefold())
    return (2, str(value).casefold())


def sort_rows(
    rows: Iterable[Any],
    sort: SortConfig,
    columns: Sequence[ColumnDef],
    accessor: FieldAccessor = get_field,
) -> list[Any]:
    """Stable single-column sort with missing values last in both directions."""
    if not sort.is_active:
        return list(rows)
    column = next((col for col in columns if col.key == sort.key), None)
    if column is None or not column.sortable:
        return list(rows)

    present: list[tuple[Any, Any]] = []
    missing: list[Any] = []
    for row in rows:
        value = accessor(row, column.key)
        if is_missing(value):
            missing.append(row)
        else:
            present.append((row, value))

    # sorted() keeps equal items in input order even with reverse=True
    ordered = sorted(
        present,
        key=lambda pair: _sort_key(pair[1]),
        reverse=sort.direction == "desc",
    )
    return [row for row, _ in ordered] + missing


def count_pages(total_items: int, page_size: int) -> int:
    if total_items <= 0:
        return 0
    size = max(1, page_size)
    return (total_items + size - 1) // size


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(page, max(1, total_pages)))


def paginate_rows(rows: Sequence[Any], page: int, page_size: int) -> list[Any]:
    size = max(1, page_size)
    start = (max(1, page) - 1) * size
    return list(rows[start : start + size])


def render_cell(column: ColumnDef, row: Any, accessor: FieldAccessor = get_field) -> Any:
    """Value shown in a cell: the column renderer's output or the raw field."""
    value = accessor(row, column.key)
    if value is MISSING:
        value = None
    if column.render is not None:
        return column.render(value, row)
    return value


def derive_view(state: TableState, source: TableSource) -> TableView:
    """Run filter, sort and paginate, in that order, over one consistent input."""
    filtered = filter_rows(
        source.rows, state.search_query, source.search_keys, source.accessor
    )
    ordered = sort_rows(filtered, state.sort, source.columns, source.accessor)

    total_items = len(ordered)
    total_pages = count_pages(total_items, state.page_size)
    current_page = clamp_page(state.current_page, total_pages)
    display_rows = paginate_rows(ordered, current_page, state.page_size)
    display_row_ids = [
        resolve_row_id(row, source.row_id_key, source.accessor) for row in display_rows
    ]

    selected = set(state.selected_ids)
    is_all_selected = bool(display_row_ids) and all(
        row_id in selected for row_id in display_row_ids
    )
    visible = set(state.visible_columns)
    return TableView(
        ordered_rows=ordered,
        display_rows=display_rows,
        display_row_ids=display_row_ids,
        pagination=PaginationState(
            current_page=current_page,
            page_size=max(1, state.page_size),
            total_items=total_items,
            total_pages=total_pages,
        ),
        visible_columns=[col for col in source.columns if col.key in visible],
        is_all_selected=is_all_selected,
    )
