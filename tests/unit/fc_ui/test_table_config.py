"""Tests for table config and row file loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fc_common.errors import ConfigurationError, DataSourceError
from fc_ui.config import (
    PAGE_SIZE_ENV,
    infer_table_config,
    load_rows,
    load_table_config,
)

pytestmark = pytest.mark.unit_ui

CONFIG_YAML = """
columns:
  - key: name
    sortable: true
  - key: email
    label: E-mail
  - key: last_session
    sortable: true
options:
  page_size: 20
  search_keys: [name, email]
  show_selection: true
"""


@pytest.fixture(autouse=True)
def _clear_page_size_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(PAGE_SIZE_ENV, raising=False)


class TestLoadTableConfig:
    def test_valid_config(self, tmp_path: Path) -> None:
        path = tmp_path / "table.yaml"
        path.write_text(CONFIG_YAML)

        config = load_table_config(path)

        defs = config.column_defs()
        assert [col.key for col in defs] == ["name", "email", "last_session"]
        assert [col.label for col in defs] == ["Name", "E-mail", "Last Session"]
        assert [col.sortable for col in defs] == [True, False, True]
        assert config.options.page_size == 20
        assert config.options.search_keys == ["name", "email"]
        assert config.options.show_selection is True

    def test_env_page_size_fills_missing_option(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(PAGE_SIZE_ENV, "50")
        path = tmp_path / "table.yaml"
        path.write_text("columns:\n  - key: name\n")

        assert load_table_config(path).options.page_size == 50

    def test_explicit_page_size_beats_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(PAGE_SIZE_ENV, "50")
        path = tmp_path / "table.yaml"
        path.write_text(CONFIG_YAML)

        assert load_table_config(path).options.page_size == 20

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="config file not found"):
            load_table_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "table.yaml"
        path.write_text("columns: [unclosed")
        with pytest.raises(ConfigurationError, match="invalid yaml"):
            load_table_config(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "table.yaml"
        path.write_text("- name\n- email\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_table_config(path)

    @pytest.mark.parametrize(
        "body",
        [
            "columns: []\n",
            "columns:\n  - key: name\n  - key: name\n",
            "columns:\n  - key: name\noptions:\n  page_size: 0\n",
        ],
    )
    def test_validation_errors(self, tmp_path: Path, body: str) -> None:
        path = tmp_path / "table.yaml"
        path.write_text(body)
        with pytest.raises(ConfigurationError, match="config validation failed") as excinfo:
            load_table_config(path)
        assert excinfo.value.context["errors"]


class TestInferTableConfig:
    def test_all_fields_sortable_and_text_fields_searchable(
        self, member_rows: list[dict]
    ) -> None:
        config = infer_table_config(member_rows)

        assert [col.key for col in config.columns] == ["id", "name", "email", "role", "sessions"]
        assert all(col.sortable for col in config.columns)
        assert config.options.search_keys == ["name", "email", "role"]

    def test_bad_env_page_size_is_a_configuration_error(
        self, member_rows: list[dict], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(PAGE_SIZE_ENV, "0")
        with pytest.raises(ConfigurationError, match="options.page_size"):
            infer_table_config(member_rows)

    def test_empty_rows_cannot_be_inferred(self) -> None:
        with pytest.raises(ConfigurationError):
            infer_table_config([])


class TestLoadRows:
    def test_json(self, tmp_path: Path, member_rows: list[dict]) -> None:
        path = tmp_path / "rows.json"
        path.write_text(json.dumps(member_rows))
        assert load_rows(path) == member_rows

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yml"
        path.write_text("- id: 1\n  name: Ana\n- id: 2\n  name: Ben\n")
        assert load_rows(path) == [{"id": 1, "name": "Ana"}, {"id": 2, "name": "Ben"}]

    def test_empty_yaml_is_empty_collection(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.yaml"
        path.write_text("")
        assert load_rows(path) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataSourceError, match="not found"):
            load_rows(tmp_path / "rows.json")

    def test_unparseable_json(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.json"
        path.write_text("[{")
        with pytest.raises(DataSourceError, match="cannot parse"):
            load_rows(path)

    def test_must_be_list_of_objects(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.json"
        path.write_text(json.dumps({"id": 1}))
        with pytest.raises(DataSourceError, match="list of objects"):
            load_rows(path)
