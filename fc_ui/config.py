"""Table config and row file loading for the terminal preview."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from fc_app.api import ColumnDef, DataTableOptions
from fc_common.config import parse_int_env
from fc_common.errors import (
    ConfigurationError,
    DataSourceError,
    validation_messages,
    wrap_error,
)

PAGE_SIZE_ENV = "FC_TABLE_PAGE_SIZE"


class ColumnConfig(BaseModel):
    """One column entry of a table config file."""

    key: str = Field(min_length=1)
    label: str | None = None
    sortable: bool = False
    width: int | str | None = None

    model_config = {"extra": "ignore"}

    def to_column_def(self) -> ColumnDef:
        label = self.label or self.key.replace("_", " ").title()
        return ColumnDef(key=self.key, label=label, sortable=self.sortable, width=self.width)


class TableConfig(BaseModel):
    """Columns plus options describing how a row file is shown."""

    columns: list[ColumnConfig] = Field(min_length=1)
    options: DataTableOptions = Field(default_factory=DataTableOptions)

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def _validate_unique_keys(self) -> "TableConfig":
        keys = [col.key for col in self.columns]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise ValueError(f"duplicate column keys: {duplicates}")
        return self

    def column_defs(self) -> list[ColumnDef]:
        return [col.to_column_def() for col in self.columns]


def _apply_env_defaults(data: dict[str, Any]) -> dict[str, Any]:
    options = dict(data.get("options") or {})
    if "page_size" not in options:
        env_page_size = parse_int_env(os.environ.get(PAGE_SIZE_ENV))
        if env_page_size is not None:
            options["page_size"] = env_page_size
    return {**data, "options": options}


def _validate(data: dict[str, Any], source: str) -> TableConfig:
    try:
        return TableConfig.model_validate(_apply_env_defaults(data))
    except ValidationError as exc:
        messages = validation_messages(exc)
        raise wrap_error(
            ConfigurationError,
            f"config validation failed: {messages[0]}",
            context={"source": source, "errors": messages},
            cause=exc,
        ) from exc


def load_table_config(path: Path) -> TableConfig:
    """Load a YAML table config, raising ConfigurationError on any problem."""
    if not path.exists():
        raise ConfigurationError(f"config file not found: {path}", context={"path": path})
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise wrap_error(
            ConfigurationError, f"invalid yaml: {exc}", context={"path": path}, cause=exc
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            "config file must contain a mapping at the top level", context={"path": path}
        )
    return _validate(data, str(path))


def infer_table_config(rows: list[dict[str, Any]]) -> TableConfig:
    """Build a config from the rows themselves: every field sortable, text fields searchable."""
    keys: dict[str, None] = {}
    text_keys: dict[str, None] = {}
    for row in rows:
        for key, value in row.items():
            keys.setdefault(key, None)
            if isinstance(value, str):
                text_keys.setdefault(key, None)
    if not keys:
        raise ConfigurationError("cannot infer columns from an empty row collection")
    data = {
        "columns": [{"key": key, "sortable": True} for key in keys],
        "options": {"search_keys": [key for key in keys if key in text_keys]},
    }
    return _validate(data, "inferred")


def load_rows(path: Path) -> list[dict[str, Any]]:
    """Read a JSON or YAML list of row mappings."""
    if not path.exists():
        raise DataSourceError(f"data file not found: {path}", context={"path": path})
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise wrap_error(
            DataSourceError, f"cannot parse {path.name}: {exc}", context={"path": path}, cause=exc
        ) from exc
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise DataSourceError(
            "data file must contain a list of objects", context={"path": path}
        )
    return data
