"""
Module: settlement_engines.boundaries
Responsibility:
    Derive the three instants that drive settlement for one booking:
    check-in, check-out, and payable-after (check-out + 86,400,000 ms).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - ``payable_after - check_out == PAYOUT_DELAY`` exactly.  payable_after
      is derived from check_out by adding a fixed millisecond timedelta,
      never stored independently, so the two cannot drift.
    - Missing check-in/check-out times fall back to the policy defaults
      (14:00 / 12:00).

Failure modes:
    - InvalidTimestampError propagated from the timestamp composer when the
      policy is strict.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from settlement_kernel.domain.booking import BookingRecord
from settlement_kernel.logging_config import get_logger
from settlement_engines.timestamps import INDOCHINA_TIME, compose_instant

logger = get_logger("engines.boundaries")

PAYOUT_DELAY_MS = 86_400_000
PAYOUT_DELAY = timedelta(milliseconds=PAYOUT_DELAY_MS)

DEFAULT_CHECK_IN_TIME = "14:00"
DEFAULT_CHECK_OUT_TIME = "12:00"


@dataclass(frozen=True)
class SettlementPolicy:
    """
    Parameters for turning booking wall-clock values into instants.

    Contract:
        Frozen; shared freely between concurrent callers.
    Non-goals:
        - The payout delay is not a policy parameter; it is PAYOUT_DELAY.
    """

    utc_offset: timezone = INDOCHINA_TIME
    default_check_in_time: str = DEFAULT_CHECK_IN_TIME
    default_check_out_time: str = DEFAULT_CHECK_OUT_TIME
    strict_timestamps: bool = True


DEFAULT_POLICY = SettlementPolicy()


@dataclass(frozen=True)
class BookingBoundaries:
    """
    Check-in and check-out instants of one booking.

    Guarantees:
        - ``payable_after`` is always ``check_out + PAYOUT_DELAY``.
    """

    check_in: datetime
    check_out: datetime

    @property
    def payable_after(self) -> datetime:
        return self.check_out + PAYOUT_DELAY


def compute_boundaries_from_fields(
    check_in_date: date | str,
    check_out_date: date | str,
    check_in_time: time | str | None = None,
    check_out_time: time | str | None = None,
    *,
    policy: SettlementPolicy = DEFAULT_POLICY,
) -> BookingBoundaries:
    """Compose boundaries from raw date/time fields, applying default times."""
    check_in = compose_instant(
        check_in_date,
        check_in_time or policy.default_check_in_time,
        offset=policy.utc_offset,
        strict=policy.strict_timestamps,
    )
    check_out = compose_instant(
        check_out_date,
        check_out_time or policy.default_check_out_time,
        offset=policy.utc_offset,
        strict=policy.strict_timestamps,
    )
    if check_out < check_in:
        logger.warning("boundaries_check_out_before_check_in", extra={
            "check_in": check_in,
            "check_out": check_out,
        })
    return BookingBoundaries(check_in=check_in, check_out=check_out)


def compute_boundaries(
    record: BookingRecord,
    *,
    policy: SettlementPolicy = DEFAULT_POLICY,
) -> BookingBoundaries:
    """Compose the boundaries of a booking record."""
    return compute_boundaries_from_fields(
        record.check_in_date,
        record.check_out_date,
        record.check_in_time,
        record.check_out_time,
        policy=policy,
    )
