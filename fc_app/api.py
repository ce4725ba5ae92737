"""Stable application-layer API surface."""

from fc_app.viewmodels import (
    ActionButton,
    ColumnDef,
    DataTableOptions,
    DataTableSnapshot,
    DataTableViewModel,
    PaginationState,
    SortConfig,
    build_data_table_viewmodel,
)

__all__ = [
    "ActionButton",
    "ColumnDef",
    "DataTableOptions",
    "DataTableSnapshot",
    "DataTableViewModel",
    "PaginationState",
    "SortConfig",
    "build_data_table_viewmodel",
]
