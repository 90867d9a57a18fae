"""
Module: settlement_engines.timestamps
Responsibility:
    Combine a calendar date and a clock time into an absolute instant
    anchored to a fixed UTC offset (Indochina Time, +07:00, by default).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Purity: never reads the system clock.
    - The offset is a constant ``timezone``; no daylight-saving rules apply
      and the caller's local offset is never consulted.

Failure modes:
    - InvalidTimestampError when the date is not ``YYYY-MM-DD`` or the time
      is not ``H``, ``HH:MM`` or ``HH:MM:SS`` (strict mode, the default).
    - In lenient mode the same inputs yield ``EPOCH`` (1970-01-01T00:00Z).
    - NaiveDatetimeError from ``ensure_aware`` / ``to_epoch_ms``.

Usage:
    from settlement_engines.timestamps import compose_instant, to_epoch_ms

    check_in = compose_instant("2026-01-10", "14:00")
    to_epoch_ms(check_in)  # 1768028400000
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone

from settlement_kernel.exceptions import InvalidTimestampError, NaiveDatetimeError
from settlement_kernel.logging_config import get_logger

logger = get_logger("engines.timestamps")

INDOCHINA_TIME = timezone(timedelta(hours=7), "ICT")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ONE_MS = timedelta(milliseconds=1)

_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_TIME_PATTERN = re.compile(r"^([0-9]{1,2})(?::([0-9]{1,2})(?::([0-9]{1,2}))?)?$")


def parse_utc_offset(text: str) -> timezone:
    """
    Parse ``+HH:MM`` / ``-HH:MM`` into a fixed-offset timezone.

    Raises:
        ValueError: If the text is not a valid offset.
    """
    match = re.fullmatch(r"([+-])([0-9]{2}):([0-9]{2})", text.strip())
    if match is None:
        raise ValueError(f"UTC offset must look like +HH:MM, got {text!r}")
    sign = 1 if match.group(1) == "+" else -1
    delta = timedelta(hours=int(match.group(2)), minutes=int(match.group(3)))
    # timezone() itself rejects offsets of 24h or more
    return timezone(sign * delta)


def _date_text(value: date | str) -> str:
    if isinstance(value, date):
        return value.isoformat()[:10]
    return str(value).strip()


def _time_text(value: time | str) -> str:
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    return str(value).strip()


def _fail(date_text: str, time_text: str, reason: str, strict: bool) -> datetime:
    if strict:
        raise InvalidTimestampError(date_text, time_text, reason)
    logger.warning("timestamp_fallback_to_epoch", extra={
        "date_text": date_text,
        "time_text": time_text,
        "reason": reason,
    })
    return EPOCH


def compose_instant(
    date_value: date | str,
    time_value: time | str,
    *,
    offset: timezone = INDOCHINA_TIME,
    strict: bool = True,
) -> datetime:
    """
    Compose an absolute instant from a calendar date and a clock time.

    Missing minute and second components default to ``00``.

    Args:
        date_value: ``date`` or ``YYYY-MM-DD`` text.
        time_value: ``time`` or ``H``/``HH:MM``/``HH:MM:SS`` text.
        offset: Fixed UTC offset the wall-clock values are read in.
        strict: Raise on malformed input instead of returning ``EPOCH``.

    Returns:
        Timezone-aware datetime carrying ``offset``.
    """
    date_text = _date_text(date_value)
    time_text = _time_text(time_value)

    if not _DATE_PATTERN.match(date_text):
        return _fail(date_text, time_text, "date must be YYYY-MM-DD", strict)
    time_match = _TIME_PATTERN.match(time_text)
    if time_match is None:
        return _fail(date_text, time_text, "time must be HH, HH:MM or HH:MM:SS", strict)

    hour, minute, second = (int(part) if part else 0 for part in time_match.groups())
    try:
        day = date.fromisoformat(date_text)
        clock = time(hour, minute, second)
    except ValueError as e:
        return _fail(date_text, time_text, str(e), strict)

    return datetime.combine(day, clock, tzinfo=offset)


def ensure_aware(instant: datetime) -> datetime:
    """Reject naive datetimes; an instant must carry its UTC offset."""
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise NaiveDatetimeError(instant.isoformat())
    return instant


def to_epoch_ms(instant: datetime) -> int:
    """Milliseconds since the Unix epoch for a timezone-aware instant."""
    return (ensure_aware(instant) - EPOCH) // _ONE_MS


def from_epoch_ms(milliseconds: int) -> datetime:
    """UTC instant for a count of milliseconds since the Unix epoch."""
    return EPOCH + timedelta(milliseconds=milliseconds)
