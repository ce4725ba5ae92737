"""Public API surface for fc_common."""

from fc_common.config import parse_bool_env, parse_int_env
from fc_common.errors import (
    ConfigurationError,
    DataSourceError,
    FCError,
    error_to_payload,
    format_error,
    validation_messages,
    wrap_error,
)
from fc_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "DataSourceError",
    "FCError",
    "error_to_payload",
    "format_error",
    "parse_bool_env",
    "parse_int_env",
    "validation_messages",
    "wrap_error",
]
