"""Typed errors raised at the edges of the data table (options, config and row files).

The engine's mutators never raise; these errors only come out of construction
and file loading, so callers can catch ``FCError`` in one place and show
``format_error(...)`` to the user.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import ValidationError


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class FCError(Exception):
    """Base class for table configuration and data loading failures."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    @property
    def details(self) -> list[str]:
        """Per-field messages collected from a validation failure, if any."""
        return list(self.context.get("errors") or [])

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(FCError):
    """Invalid table options or table config file."""


class DataSourceError(FCError):
    """Row file missing, unparseable or not a list of objects."""


T = TypeVar("T", bound=FCError)


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into ``"field.path: message"`` strings."""
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Build a typed error; a ValidationError cause adds its field messages."""
    merged = dict(context or {})
    if isinstance(cause, ValidationError) and "errors" not in merged:
        merged["errors"] = validation_messages(cause)
    return error_cls(message, context=merged, cause=cause)


def error_to_payload(error: FCError) -> dict[str, Any]:
    """Convert an FCError to a signal/event payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }


def format_error(error: FCError, *, prefix: str | None = None) -> str:
    """One-line user message: the error text plus field details not already in it."""
    payload = error_to_payload(error)
    text = payload["error"]
    extra = [detail for detail in error.details if detail not in text]
    if extra:
        text = f"{text} ({'; '.join(extra)})"
    return f"{prefix}: {text}" if prefix else text
