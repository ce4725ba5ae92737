"""Pytest configuration for fc_gui tests."""

from pathlib import Path

import pytest

from tests.helpers.optional_imports import missing_modules

MISSING_GUI_DEPS = missing_modules("PySide6", "PySide6.QtCore")

# Skip collection of Qt-backed test files if PySide6 is missing.
if MISSING_GUI_DEPS:
    collect_ignore = [
        path.name
        for path in Path(__file__).parent.glob("test_*.py")
        if path.name != "test_formatters.py"
    ]


@pytest.fixture(scope="session")
def qt_core_app():
    """Shared QCoreApplication for signal delivery."""
    from PySide6.QtCore import QCoreApplication

    return QCoreApplication.instance() or QCoreApplication([])
