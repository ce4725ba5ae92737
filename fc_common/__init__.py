"""Shared helpers for the coach-table packages."""

from fc_common.api import ConfigurationError, FCError, configure_logging

__all__ = ["configure_logging", "ConfigurationError", "FCError"]
