"""
Module: settlement_engines.eligibility
Responsibility:
    Decide whether a booking counts toward host revenue at all.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only paid bookings in ``confirmed`` or ``completed`` status whose
      check-in has occurred are eligible.
    - A record whose dates or times cannot be composed is excluded (and
      logged), never defaulted into an early instant.

Failure modes:
    - NaiveDatetimeError when ``now`` carries no UTC offset.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from settlement_kernel.domain.booking import (
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_CONFIRMED,
    BookingRecord,
)
from settlement_kernel.exceptions import InvalidTimestampError
from settlement_kernel.logging_config import get_logger
from settlement_engines.boundaries import (
    DEFAULT_POLICY,
    BookingBoundaries,
    SettlementPolicy,
    compute_boundaries,
)
from settlement_engines.classifier import classify_boundaries
from settlement_engines.timestamps import ensure_aware
from settlement_engines.tracer import traced_engine

logger = get_logger("engines.eligibility")

ELIGIBLE_BOOKING_STATUSES = frozenset({
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_COMPLETED,
})


def has_eligible_status(record: BookingRecord) -> bool:
    """True if the booking is paid and confirmed or completed."""
    return record.is_paid and record.booking_status in ELIGIBLE_BOOKING_STATUSES


def settlement_boundaries(
    record: BookingRecord,
    *,
    policy: SettlementPolicy = DEFAULT_POLICY,
) -> BookingBoundaries | None:
    """
    Boundaries of a booking, or None when its dates or times are malformed.

    The exclusion is logged once per call as
    ``booking_excluded_invalid_timestamp``.
    """
    try:
        return compute_boundaries(record, policy=policy)
    except InvalidTimestampError as e:
        logger.warning("booking_excluded_invalid_timestamp", extra={
            "booking_id": record.booking_id,
            "date_text": e.date_text,
            "time_text": e.time_text,
            "reason": e.reason,
        })
        return None


def is_eligible(
    record: BookingRecord,
    now: datetime,
    *,
    policy: SettlementPolicy = DEFAULT_POLICY,
) -> bool:
    """True if the booking is paid, confirmed/completed and checked in."""
    ensure_aware(now)
    if not has_eligible_status(record):
        return False
    boundaries = settlement_boundaries(record, policy=policy)
    if boundaries is None:
        return False
    return classify_boundaries(boundaries, now) is not None


@traced_engine("eligibility", "1.0", fingerprint_fields=("records", "now"))
def filter_eligible(
    records: Sequence[BookingRecord],
    now: datetime,
    *,
    policy: SettlementPolicy = DEFAULT_POLICY,
) -> tuple[BookingRecord, ...]:
    """Keep the eligible records, preserving input order."""
    eligible = tuple(r for r in records if is_eligible(r, now, policy=policy))
    logger.debug("eligibility_filtered", extra={
        "record_count": len(records),
        "eligible_count": len(eligible),
    })
    return eligible
