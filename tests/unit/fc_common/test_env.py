"""Tests for fc_common.config.env parsing utilities."""

import pytest

from fc_common.config import parse_bool_env, parse_int_env


pytestmark = pytest.mark.unit_common


class TestParseBoolEnv:
    """Tests for parse_bool_env function."""

    def test_returns_none_for_none(self) -> None:
        assert parse_bool_env(None) is None

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", "  On "])
    def test_returns_true_for_truthy_values(self, value: str) -> None:
        assert parse_bool_env(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "random", ""])
    def test_returns_false_for_falsy_values(self, value: str) -> None:
        assert parse_bool_env(value) is False


class TestParseIntEnv:
    """Tests for parse_int_env function."""

    def test_returns_none_for_none(self) -> None:
        assert parse_int_env(None) is None

    def test_parses_integers(self) -> None:
        assert parse_int_env("25") == 25
        assert parse_int_env(" -3 ") == -3

    @pytest.mark.parametrize("value", ["", "ten", "2.5"])
    def test_returns_none_for_invalid(self, value: str) -> None:
        assert parse_int_env(value) is None
