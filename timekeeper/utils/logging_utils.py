"""Structured logging helpers: scoped context fields and secret redaction."""

import logging
import threading
import uuid
from typing import Any, Dict, Optional

_state = threading.local()

REDACTED = "***REDACTED***"

# Substrings of key names whose values never reach a log line
SENSITIVE_KEYS = (
    "token",
    "password",
    "secret",
    "api_key",
    "authorization",
    "credentials",
)


def _current_context() -> Dict[str, Any]:
    context = getattr(_state, "context", None)
    if context is None:
        context = {}
        _state.context = context
    return context


def generate_correlation_id() -> str:
    """Return a new random correlation id for one CLI run or store call."""
    return uuid.uuid4().hex


def get_correlation_id() -> Optional[str]:
    """Correlation id of the innermost active LogContext, if any."""
    return _current_context().get("correlation_id")


def get_log_context() -> Dict[str, Any]:
    """Copy of the fields currently attached to log records."""
    return dict(_current_context())


class LogContext:
    """Attach structured fields to every log record emitted in the block.

    Nested contexts add to the outer fields and restore them on exit.

    Example:
        with LogContext(employee_id="emp-1", correlation_id=generate_correlation_id()):
            logger.info("Aggregating entries")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._saved: Dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._saved = get_log_context()
        _current_context().update(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _state.context = self._saved


class _ContextFilter(logging.Filter):
    """Copy the active LogContext fields onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _current_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def sanitize_sensitive_data(data: Any) -> Any:
    """Return a copy of ``data`` with secret-looking values redacted.

    Dictionaries are walked recursively (including dictionaries inside
    lists); keys are matched case-insensitively against SENSITIVE_KEYS.
    Non-container values are returned unchanged.

    Args:
        data: Settings dump, request headers or any nested structure

    Returns:
        Redacted copy safe to log
    """
    if isinstance(data, dict):
        cleaned: Dict[Any, Any] = {}
        for key, value in data.items():
            if _is_sensitive(key):
                cleaned[key] = None if value is None else REDACTED
            else:
                cleaned[key] = sanitize_sensitive_data(value)
        return cleaned
    if isinstance(data, (list, tuple)):
        return type(data)(sanitize_sensitive_data(item) for item in data)
    return data
