"""Typed models shared by the data table engine and its presenters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping, Sequence

from pydantic import BaseModel, Field, field_validator

SortDirection = Literal["asc", "desc"]
ActionVariant = Literal["info", "success", "warning", "danger"]

DEFAULT_PAGE_SIZE = 10
DEFAULT_PAGE_SIZE_OPTIONS = (5, 10, 20, 50, 100)


class _Missing:
    """Marker for a field the row does not carry at all."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def get_field(row: Any, key: str) -> Any:
    """Default field accessor: mapping lookup, then attribute lookup."""
    if isinstance(row, Mapping):
        return row.get(key, MISSING)
    return getattr(row, key, MISSING)


FieldAccessor = Callable[[Any, str], Any]
CellRenderer = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str
    sortable: bool = False
    width: int | str | None = None
    render: CellRenderer | None = field(default=None, compare=False)


@dataclass(frozen=True)
class SortConfig:
    """Single-column sort spec; ``key=None`` means input order."""

    key: str | None = None
    direction: SortDirection | None = None

    @property
    def is_active(self) -> bool:
        return self.key is not None and self.direction is not None


@dataclass(frozen=True)
class PaginationState:
    current_page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def start_item(self) -> int:
        """1-based index of the first item on the page (0 when empty)."""
        if self.total_items == 0:
            return 0
        return (self.current_page - 1) * self.page_size + 1

    @property
    def end_item(self) -> int:
        return min(self.current_page * self.page_size, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def range_label(self) -> str:
        return (
            f"Showing {self.start_item} to {self.end_item} "
            f"of {self.total_items} results"
        )


@dataclass(frozen=True)
class ActionButton:
    """Per-row action rendered next to each displayed row."""

    icon: str
    label: str
    variant: ActionVariant
    on_click: Callable[[Any], None] = field(compare=False)


@dataclass(frozen=True)
class TableState:
    """Mutable-by-replacement view state owned by one table instance."""

    search_query: str = ""
    sort: SortConfig = SortConfig()
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    visible_columns: tuple[str, ...] = ()
    selected_ids: tuple[str, ...] = ()
    show_borders: bool = True


@dataclass(frozen=True)
class TableSource:
    """Caller-supplied inputs, swapped as a whole when data or columns change."""

    rows: tuple[Any, ...]
    columns: tuple[ColumnDef, ...]
    search_keys: tuple[str, ...] = ()
    row_id_key: str = "id"
    accessor: FieldAccessor = get_field

    def column(self, key: str | None) -> ColumnDef | None:
        if key is None:
            return None
        return next((col for col in self.columns if col.key == key), None)

    @property
    def column_keys(self) -> tuple[str, ...]:
        return tuple(col.key for col in self.columns)


class DataTableOptions(BaseModel):
    """Construction-time options of a data table."""

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Rows per page")
    search_keys: list[str] = Field(
        default_factory=list, description="Fields eligible for text search"
    )
    row_id_key: str = Field(default="id", min_length=1, description="Row identifier field")
    show_search: bool = True
    show_pagination: bool = True
    show_selection: bool = False
    show_borders: bool = True
    page_size_options: list[int] = Field(
        default_factory=lambda: list(DEFAULT_PAGE_SIZE_OPTIONS)
    )

    model_config = {"extra": "ignore"}

    @field_validator("page_size_options")
    @classmethod
    def _validate_page_size_options(cls, value: Sequence[int]) -> list[int]:
        if any(size < 1 for size in value):
            raise ValueError("page_size_options entries must be >= 1")
        return sorted(set(value))
