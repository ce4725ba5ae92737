"""UI-agnostic viewmodel helpers for the data table."""

from fc_app.viewmodels.data_table import (
    DataTableSnapshot,
    DataTableViewModel,
    build_data_table_viewmodel,
    resolve_options,
)
from fc_app.viewmodels.table_models import (
    MISSING,
    ActionButton,
    ColumnDef,
    DataTableOptions,
    PaginationState,
    SortConfig,
    SortDirection,
    TableSource,
    TableState,
    get_field,
)
from fc_app.viewmodels.table_pipeline import (
    TableView,
    derive_view,
    filter_rows,
    paginate_rows,
    render_cell,
    resolve_row_id,
    sort_rows,
)

__all__ = [
    "MISSING",
    "ActionButton",
    "ColumnDef",
    "DataTableOptions",
    "DataTableSnapshot",
    "DataTableViewModel",
    "PaginationState",
    "SortConfig",
    "SortDirection",
    "TableSource",
    "TableState",
    "TableView",
    "build_data_table_viewmodel",
    "derive_view",
    "filter_rows",
    "get_field",
    "paginate_rows",
    "render_cell",
    "resolve_options",
    "resolve_row_id",
    "sort_rows",
]
