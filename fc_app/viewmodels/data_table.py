"""Data table viewmodel: view state plus derived snapshots (UI-agnostic)."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Sequence

from pydantic import ValidationError

from fc_app.viewmodels.table_models import (
    ActionButton,
    ColumnDef,
    DataTableOptions,
    FieldAccessor,
    PaginationState,
    SortConfig,
    SortDirection,
    TableSource,
    TableState,
    get_field,
)
from fc_app.viewmodels.table_pipeline import (
    UNDEFINED_ROW_ID,
    TableView,
    clamp_page,
    derive_view,
    render_cell,
    resolve_row_id,
)
from fc_common.errors import ConfigurationError, wrap_error

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[list[str]], None]


@dataclass(frozen=True)
class DataTableSnapshot:
    display_rows: list[Any]
    display_row_ids: list[str]
    row_count: int
    sort_config: SortConfig
    pagination: PaginationState
    visible_columns: list[str]
    visible_column_defs: list[ColumnDef]
    selected_ids: list[str]
    is_all_selected: bool
    search_query: str
    show_borders: bool
    pagination_visible: bool
    accessor: FieldAccessor = field(default=get_field, repr=False, compare=False)

    @property
    def is_empty(self) -> bool:
        return not self.display_rows

    def sort_indicator(self, key: str) -> SortDirection | None:
        """Direction to draw on a column header, None when it is not sorted."""
        if self.sort_config.key != key:
            return None
        return self.sort_config.direction

    def is_selected(self, row_id: object) -> bool:
        return str(row_id) in self.selected_ids

    def cell(self, column: ColumnDef, row: Any) -> Any:
        return render_cell(column, row, self.accessor)


def resolve_options(
    options: DataTableOptions | dict[str, Any] | None = None, **overrides: Any
) -> DataTableOptions:
    """Merge options with keyword overrides, raising ConfigurationError on bad input."""
    data: dict[str, Any] = {}
    if isinstance(options, DataTableOptions):
        data = options.model_dump()
    elif options is not None:
        data = dict(options)
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return DataTableOptions.model_validate(data)
    except ValidationError as exc:
        raise wrap_error(ConfigurationError, "invalid data table options", cause=exc) from exc


class DataTableViewModel:
    """Own the view state of one table and build snapshots from it.

    Every mutator swaps in a new frozen ``TableState`` (and, for data or
    column changes, a new ``TableSource``), so a snapshot is always derived
    from one consistent pair. Mutators never raise on caller data: bad sort
    keys are ignored, pages and sizes are clamped, odd identifiers are
    coerced to strings.
    """

    def __init__(
        self,
        rows: Iterable[Any],
        columns: Sequence[ColumnDef],
        options: DataTableOptions | dict[str, Any] | None = None,
        *,
        page_size: int | None = None,
        search_keys: Sequence[str] | None = None,
        row_id_key: str | None = None,
        accessor: FieldAccessor | None = None,
        actions: Sequence[ActionButton] = (),
        on_selection_change: SelectionCallback | None = None,
    ) -> None:
        self._options = resolve_options(
            options,
            page_size=page_size,
            search_keys=list(search_keys) if search_keys is not None else None,
            row_id_key=row_id_key,
        )
        self._actions = tuple(actions)
        self._on_selection_change = on_selection_change
        source = TableSource(
            rows=tuple(rows),
            columns=tuple(columns),
            search_keys=tuple(self._options.search_keys),
            row_id_key=self._options.row_id_key,
            accessor=accessor or get_field,
        )
        self._source = source
        self._state = TableState(
            page_size=self._options.page_size,
            visible_columns=source.column_keys,
            show_borders=self._options.show_borders,
        )
        self._cache: tuple[TableState, TableSource, TableView] | None = None
        _warn_on_bad_row_ids(source)

    # Inputs

    @property
    def options(self) -> DataTableOptions:
        return self._options

    @property
    def actions(self) -> tuple[ActionButton, ...]:
        return self._actions

    @property
    def rows(self) -> tuple[Any, ...]:
        return self._source.rows

    @property
    def columns(self) -> tuple[ColumnDef, ...]:
        return self._source.columns

    @property
    def state(self) -> TableState:
        return self._state

    # Derived outputs

    @property
    def display_rows(self) -> list[Any]:
        return self._view().display_rows

    @property
    def sort_config(self) -> SortConfig:
        return self._state.sort

    @property
    def pagination(self) -> PaginationState:
        return self._view().pagination

    @property
    def visible_columns(self) -> list[str]:
        return list(self._state.visible_columns)

    @property
    def selected_ids(self) -> list[str]:
        return list(self._state.selected_ids)

    @property
    def search_query(self) -> str:
        return self._state.search_query

    @property
    def is_all_selected(self) -> bool:
        return self._view().is_all_selected

    def snapshot(self) -> DataTableSnapshot:
        view = self._view()
        state = self._state
        return DataTableSnapshot(
            display_rows=list(view.display_rows),
            display_row_ids=list(view.display_row_ids),
            row_count=len(view.display_rows),
            sort_config=state.sort,
            pagination=view.pagination,
            visible_columns=list(state.visible_columns),
            visible_column_defs=list(view.visible_columns),
            selected_ids=list(state.selected_ids),
            is_all_selected=view.is_all_selected,
            search_query=state.search_query,
            show_borders=state.show_borders,
            pagination_visible=(
                self._options.show_pagination and view.pagination.total_pages > 0
            ),
            accessor=self._source.accessor,
        )

    def selected_rows(self) -> list[Any]:
        """Selected rows of the whole collection, in input order."""
        selected = set(self._state.selected_ids)
        return [row for row in self._source.rows if self._row_id(row) in selected]

    # Mutators

    def set_search_query(self, query: str) -> None:
        self._commit(replace(self._state, search_query=query or "", current_page=1))

    def handle_sort(self, key: str) -> None:
        column = self._source.column(key)
        if column is None or not column.sortable:
            logger.debug("Ignoring sort request for column %r", key)
            return
        current = self._state.sort
        if current.key != key or current.direction is None:
            sort = SortConfig(key=key, direction="asc")
        elif current.direction == "asc":
            sort = SortConfig(key=key, direction="desc")
        else:
            sort = SortConfig()
        self._commit(replace(self._state, sort=sort))

    def go_to_page(self, page: int) -> None:
        total_pages = self._view().pagination.total_pages
        if total_pages == 0:
            return
        self._commit(replace(self._state, current_page=clamp_page(int(page), total_pages)))

    def set_page_size(self, page_size: int) -> None:
        self._commit(replace(self._state, page_size=max(1, int(page_size))))

    def toggle_column(self, key: str) -> None:
        keys = self._source.column_keys
        if key not in keys:
            return
        visible = set(self._state.visible_columns)
        if key in visible:
            visible.discard(key)
        else:
            visible.add(key)
        self._commit(
            replace(self._state, visible_columns=tuple(k for k in keys if k in visible))
        )

    def toggle_row(self, row_id: object) -> None:
        target = str(row_id)
        selected = list(self._state.selected_ids)
        if target in selected:
            selected.remove(target)
        else:
            selected.append(target)
        self._commit(replace(self._state, selected_ids=tuple(selected)))

    def toggle_all_rows(self) -> None:
        view = self._view()
        page_ids = view.display_row_ids
        if not page_ids:
            return
        selected = list(self._state.selected_ids)
        if view.is_all_selected:
            on_page = set(page_ids)
            selected = [row_id for row_id in selected if row_id not in on_page]
        else:
            already = set(selected)
            selected.extend(
                row_id
                for row_id in dict.fromkeys(page_ids)
                if row_id not in already
            )
        self._commit(replace(self._state, selected_ids=tuple(selected)))

    def clear_selection(self) -> None:
        self._commit(replace(self._state, selected_ids=()))

    def set_show_borders(self, show: bool) -> None:
        self._commit(replace(self._state, show_borders=bool(show)))

    def toggle_borders(self) -> None:
        self.set_show_borders(not self._state.show_borders)

    def set_data(self, rows: Iterable[Any]) -> None:
        """Replace the row collection and drop selections that no longer exist."""
        source = replace(self._source, rows=tuple(rows))
        present = {resolve_row_id(row, source.row_id_key, source.accessor) for row in source.rows}
        kept = tuple(row_id for row_id in self._state.selected_ids if row_id in present)
        logger.debug(
            "Replacing table data: %d rows, %d selections pruned",
            len(source.rows),
            len(self._state.selected_ids) - len(kept),
        )
        _warn_on_bad_row_ids(source)
        self._commit(replace(self._state, selected_ids=kept), source)

    def set_columns(self, columns: Sequence[ColumnDef]) -> None:
        """Replace the column definitions, keeping hidden columns hidden."""
        source = replace(self._source, columns=tuple(columns))
        hidden = set(self._source.column_keys) - set(self._state.visible_columns)
        visible = tuple(key for key in source.column_keys if key not in hidden)
        sort = self._state.sort
        column = source.column(sort.key)
        if sort.key is not None and (column is None or not column.sortable):
            sort = SortConfig()
        logger.debug("Replacing table columns: %s", list(source.column_keys))
        self._commit(replace(self._state, visible_columns=visible, sort=sort), source)

    def invoke_action(self, label: str, row_id: object) -> bool:
        """Run the action named ``label`` on the row with ``row_id``."""
        action = next((item for item in self._actions if item.label == label), None)
        if action is None:
            return False
        target = str(row_id)
        row = next((r for r in self._source.rows if self._row_id(r) == target), None)
        if row is None:
            return False
        action.on_click(row)
        return True

    # Internals

    def _row_id(self, row: Any) -> str:
        return resolve_row_id(row, self._source.row_id_key, self._source.accessor)

    def _view(self) -> TableView:
        cache = self._cache
        if cache is not None and cache[0] is self._state and cache[1] is self._source:
            return cache[2]
        view = derive_view(self._state, self._source)
        self._cache = (self._state, self._source, view)
        return view

    def _commit(self, state: TableState, source: TableSource | None = None) -> None:
        previous_selection = self._state.selected_ids
        next_source = source or self._source
        view = derive_view(state, next_source)
        if view.pagination.current_page != state.current_page:
            state = replace(state, current_page=view.pagination.current_page)
        self._state = state
        self._source = next_source
        self._cache = (state, next_source, view)
        if state.selected_ids != previous_selection:
            self._notify_selection()

    def _notify_selection(self) -> None:
        if self._on_selection_change is not None:
            self._on_selection_change(list(self._state.selected_ids))


def _warn_on_bad_row_ids(source: TableSource) -> None:
    counts = Counter(
        resolve_row_id(row, source.row_id_key, source.accessor) for row in source.rows
    )
    missing = counts.get(UNDEFINED_ROW_ID, 0)
    duplicates = sorted(
        row_id for row_id, count in counts.items() if count > 1 and row_id != UNDEFINED_ROW_ID
    )
    if missing:
        logger.warning(
            "%d rows have no %r field; their id resolves to %r",
            missing,
            source.row_id_key,
            UNDEFINED_ROW_ID,
        )
    if duplicates:
        logger.warning(
            "Duplicate row ids for key %r: %s", source.row_id_key, duplicates[:10]
        )


def build_data_table_viewmodel(
    rows: Iterable[Any],
    columns: Sequence[ColumnDef],
    options: DataTableOptions | dict[str, Any] | None = None,
    **kwargs: Any,
) -> DataTableViewModel:
    return DataTableViewModel(rows, columns, options, **kwargs)
