"""
settlement_engines.tracer -- SETTLEMENT_ENGINE_TRACE records for engine calls.

Responsibility:
    ``@traced_engine`` wraps a pure engine function and emits one structured
    log record per call: engine name and version, a fingerprint of the
    selected arguments, call duration and outcome.  Two calls with the same
    fingerprint saw the same inputs, which is what a payout dispute needs
    to replay a statement.

Architecture position:
    Engines -- support code for the calculation layer.  Emits a log record
    and nothing else; arguments are read, never modified.

Invariants enforced:
    - Arguments are bound to parameter names before fingerprinting, so a
      positional and a keyword call with equal values hash the same.
    - Mappings are hashed with sorted keys; sequences keep their order.
    - The fingerprint is the first 16 hex characters of a SHA-256 digest.

Failure modes:
    - An exception from the wrapped engine is re-raised unchanged after a
      trace record with ``outcome="error"`` is emitted.

Usage:
    @traced_engine("aggregator", "1.0", fingerprint_fields=("items",))
    def aggregate(items, currency):
        ...
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import time
from collections.abc import Callable, Mapping
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from settlement_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")


def _canonicalize(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (str, int, float, Decimal)):
        return str(value)
    if isinstance(value, Mapping):
        return "{" + ",".join(
            f"{k}:{_canonicalize(v)}" for k, v in sorted(value.items())
        ) + "}"
    if is_dataclass(value) and not isinstance(value, type):
        body = ",".join(
            f"{f.name}={_canonicalize(getattr(value, f.name))}" for f in fields(value)
        )
        return f"{type(value).__name__}({body})"
    if isinstance(value, (list, tuple, frozenset, set)):
        items = [_canonicalize(v) for v in value]
        if isinstance(value, (set, frozenset)):
            items.sort()
        return "[" + ",".join(items) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """Hash the named arguments; names absent from ``arguments`` hash as null."""
    canonical = "|".join(
        f"{name}={_canonicalize(arguments.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Emit a SETTLEMENT_ENGINE_TRACE record around each call of the engine."""

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                bound = signature.bind_partial(*args, **kwargs)
                bound.apply_defaults()
                fingerprint = compute_input_fingerprint(fingerprint_fields, bound.arguments)

            outcome = "ok"
            t0 = time.monotonic()
            try:
                return func(*args, **kwargs)
            except Exception:
                outcome = "error"
                raise
            finally:
                _logger.info(
                    "SETTLEMENT_ENGINE_TRACE",
                    extra={
                        "trace_type": "SETTLEMENT_ENGINE_TRACE",
                        "engine_name": engine_name,
                        "engine_version": engine_version,
                        "input_fingerprint": fingerprint,
                        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                        "outcome": outcome,
                        "function": func.__qualname__,
                    },
                )

        return wrapper

    return decorator
