"""Tests for GUI formatting helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fc_gui.utils.formatters import (
    format_cell,
    format_datetime,
    format_header,
    format_optional,
)

pytestmark = pytest.mark.unit_gui


def test_format_datetime() -> None:
    value = datetime(2024, 3, 1, 7, 30, tzinfo=timezone.utc)
    assert format_datetime(value) == "2024-03-01 07:30:00"
    assert format_datetime(value, utc=True) == "2024-03-01 07:30:00 UTC"
    assert format_datetime(None) == "Unknown"


def test_format_optional() -> None:
    assert format_optional(None) == "-"
    assert format_optional(0) == "0"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, ""), (True, "Yes"), (False, "No"), (12, "12"), ("coach", "coach")],
)
def test_format_cell(value: object, expected: str) -> None:
    assert format_cell(value) == expected


def test_format_header() -> None:
    assert format_header("Name", "asc", True) == "Name ▲"
    assert format_header("Name", "desc", True) == "Name ▼"
    assert format_header("Name", None, True) == "Name"
    assert format_header("Email", "asc", False) == "Email"
