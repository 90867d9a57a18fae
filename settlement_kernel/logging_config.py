"""Structured JSON logging for the settlement engine.

Every record under the ``settlement`` logger namespace is rendered as one
JSON line carrying the request-scoped fields held in ``LogContext``
(correlation, actor, host, booking, trace) plus any ``extra`` payload.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, Iterator

ROOT_LOGGER_NAME = "settlement"

# ---------------------------------------------------------------------------
# Request-scoped fields
# ---------------------------------------------------------------------------

_CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"settlement_log_{name}", default=None)
    for name in ("correlation_id", "actor_id", "host_id", "booking_id", "trace_id")
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _CONTEXT_FIELDS[name]
    except KeyError:
        raise TypeError(f"unknown log context field: {name!r}") from None


class LogContext:
    """Context-local log fields, safe across threads and asyncio tasks."""

    @staticmethod
    def set(**fields: str | None) -> None:
        """Set the given fields. ``None`` values leave a field untouched."""
        for name, value in fields.items():
            var = _context_var(name)
            if value is not None:
                var.set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        return {
            name: value
            for name, var in _CONTEXT_FIELDS.items()
            if (value := var.get()) is not None
        }

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT_FIELDS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[type["LogContext"]]:
        """Set fields for the duration of a ``with`` block, then restore them."""
        tokens = [
            (var, var.set(value))
            for var, value in ((_context_var(n), v) for n, v in fields.items())
            if value is not None
        ]
        try:
            yield LogContext
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------

_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    # SettlementError subclasses keep their inputs as public attributes
    for name, value in vars(exc).items():
        if not name.startswith("_"):
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, message, context, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        payload.update(
            (k, v) for k, v in vars(record).items()
            if k not in _RESERVED_ATTRS and k not in payload
        )

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``settlement`` namespace, e.g. ``settlement.engines.audit``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


_setup_lock = threading.Lock()
_configured = False


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach a JSON handler to the ``settlement`` logger. Later calls are no-ops."""
    global _configured
    with _setup_lock:
        if _configured:
            return
        _configured = True

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(level.upper() if isinstance(level, str) else level)
        root.propagate = False

        target = handler or logging.StreamHandler(stream or sys.stderr)
        target.setFormatter(StructuredFormatter())
        root.addHandler(target)


def reset_logging() -> None:
    """Undo ``configure_logging``. Used by the test suite."""
    global _configured
    with _setup_lock:
        _configured = False
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.handlers.clear()
        root.setLevel(logging.WARNING)
