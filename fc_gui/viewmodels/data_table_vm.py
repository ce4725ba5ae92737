"""ViewModel for the data table widget - wraps fc_app.api.DataTableViewModel."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from PySide6.QtCore import QObject, Signal

from fc_app.api import (
    ActionButton,
    ColumnDef,
    DataTableOptions,
    DataTableSnapshot,
    DataTableViewModel,
    build_data_table_viewmodel,
)
from fc_common.errors import FCError, format_error
from fc_gui.utils.formatters import format_cell, format_header


class GUIDataTableViewModel(QObject):
    """Qt-aware wrapper around fc_app.api.DataTableViewModel.

    Forwards user gestures to the table engine and emits signals for UI updates.
    """

    # Signals
    snapshot_changed = Signal(object)  # DataTableSnapshot
    selection_changed = Signal(list)  # list of row ids
    action_triggered = Signal(str, str)  # action label, row id
    error_occurred = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._table: DataTableViewModel | None = None
        self._snapshot: DataTableSnapshot | None = None
        self._selection_listener: Callable[[list[str]], None] | None = None
        self._pending_selection: list[str] | None = None
        self._applying = False

    @property
    def table(self) -> DataTableViewModel | None:
        """Underlying table engine."""
        return self._table

    @property
    def snapshot(self) -> DataTableSnapshot | None:
        """Current table snapshot."""
        return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return self._table is not None

    def load(
        self,
        rows: Iterable[Any],
        columns: Sequence[ColumnDef],
        options: DataTableOptions | dict[str, Any] | None = None,
        *,
        actions: Sequence[ActionButton] = (),
        **kwargs: Any,
    ) -> bool:
        """Build a fresh table engine. Returns True if successful.

        A caller-supplied ``on_selection_change`` is called just before
        ``selection_changed`` is emitted, after the snapshot is refreshed.
        """
        self._selection_listener = kwargs.pop("on_selection_change", None)
        self._pending_selection = None
        try:
            self._table = build_data_table_viewmodel(
                rows,
                columns,
                options,
                actions=actions,
                on_selection_change=self._on_selection_change,
                **kwargs,
            )
        except FCError as e:
            self._table = None
            self._snapshot = None
            self.error_occurred.emit(format_error(e, prefix="Failed to configure table"))
            return False
        self.refresh_snapshot()
        return True

    def clear(self) -> None:
        """Drop the table engine and its snapshot."""
        self._table = None
        self._snapshot = None

    def refresh_snapshot(self) -> None:
        """Refresh the snapshot from the underlying engine."""
        if self._table is None:
            return
        self._snapshot = self._table.snapshot()
        self.snapshot_changed.emit(self._snapshot)

    # Methods wired to view gestures

    def set_search_query(self, query: str) -> None:
        self._apply("set_search_query", query)

    def handle_sort(self, key: str) -> None:
        self._apply("handle_sort", key)

    def go_to_page(self, page: int) -> None:
        self._apply("go_to_page", page)

    def first_page(self) -> None:
        self.go_to_page(1)

    def previous_page(self) -> None:
        if self._snapshot is not None:
            self.go_to_page(self._snapshot.pagination.current_page - 1)

    def next_page(self) -> None:
        if self._snapshot is not None:
            self.go_to_page(self._snapshot.pagination.current_page + 1)

    def last_page(self) -> None:
        if self._snapshot is not None:
            self.go_to_page(self._snapshot.pagination.total_pages)

    def set_page_size(self, page_size: int) -> None:
        self._apply("set_page_size", page_size)

    def toggle_column(self, key: str) -> None:
        self._apply("toggle_column", key)

    def toggle_row(self, row_id: str) -> None:
        self._apply("toggle_row", row_id)

    def toggle_all_rows(self) -> None:
        self._apply("toggle_all_rows")

    def clear_selection(self) -> None:
        self._apply("clear_selection")

    def toggle_borders(self) -> None:
        self._apply("toggle_borders")

    def set_data(self, rows: Iterable[Any]) -> None:
        self._apply("set_data", rows)

    def set_columns(self, columns: Sequence[ColumnDef]) -> None:
        self._apply("set_columns", columns)

    def invoke_action(self, label: str, row_id: str) -> None:
        if self._table is None:
            return
        if self._table.invoke_action(label, row_id):
            self.action_triggered.emit(label, str(row_id))
        else:
            self.error_occurred.emit(f"Action {label!r} unavailable for row {row_id}")

    # Data access methods for views

    def get_header_labels(self) -> list[str]:
        """Visible column headers with sort arrows."""
        if self._snapshot is None:
            return []
        return [
            format_header(col.label, self._snapshot.sort_indicator(col.key), col.sortable)
            for col in self._snapshot.visible_column_defs
        ]

    def get_table_rows(self) -> list[list[str]]:
        """Displayed rows as text cells for the visible columns."""
        if self._snapshot is None:
            return []
        snap = self._snapshot
        return [
            [format_cell(snap.cell(col, row)) for col in snap.visible_column_defs]
            for row in snap.display_rows
        ]

    def get_range_text(self) -> str:
        if self._snapshot is None or not self._snapshot.pagination_visible:
            return ""
        return self._snapshot.pagination.range_label()

    def get_page_size_options(self) -> list[int]:
        if self._table is None:
            return []
        return list(self._table.options.page_size_options)

    def _apply(self, method: str, *args: Any) -> None:
        if self._table is None:
            return
        self._applying = True
        try:
            getattr(self._table, method)(*args)
        finally:
            self._applying = False
        self.refresh_snapshot()
        self._flush_selection()

    def _on_selection_change(self, selected_ids: list[str]) -> None:
        # Emitted once the snapshot reflects the new selection.
        self._pending_selection = list(selected_ids)
        if not self._applying:
            self.refresh_snapshot()
            self._flush_selection()

    def _flush_selection(self) -> None:
        pending, self._pending_selection = self._pending_selection, None
        if pending is None:
            return
        if self._selection_listener is not None:
            self._selection_listener(pending)
        self.selection_changed.emit(pending)
