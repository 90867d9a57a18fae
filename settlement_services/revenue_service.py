"""
settlement_services.revenue_service -- Host revenue statement and state verification.

Responsibility:
    Reads the current instant from an injected Clock exactly once per call
    and runs the pure settlement engine over a host's bookings: eligibility,
    classification, per-booking amount, aggregation.  Also re-verifies the
    settlement state of a single booking at server time for support and
    dispute tooling.

Architecture position:
    Services -- orchestration over engines + kernel.  Holds no state
    between calls; concurrent callers need no coordination.

Invariants enforced:
    - One ``now`` per statement: every booking in a statement is classified
      against the same instant.
    - Records with malformed dates/times are excluded from the totals and
      reported in ``skipped_booking_ids``.
    - Totals come from ``aggregate``; available balance is never derived by
      subtraction.

Failure modes:
    - CurrencyMismatchError when bookings in one statement carry different
      currencies (conversion is out of scope).
    - MissingBookingDatesError / InvalidTimestampError from ``verify``.

Audit relevance:
    Each included booking emits a ``settlement_state_decided`` record with
    check-in, check-out, payable-after and server time rendered in UTC.
    These log records are the evidence trail for payout disputes.

Usage:
    from settlement_config import get_active_config
    from settlement_kernel.domain.clock import SystemClock
    from settlement_services import RevenueService

    service = RevenueService(SystemClock(), get_active_config())
    statement = service.build_statement(bookings)
    statement.totals.total_revenue
    statement.totals.available_balance
"""

from __future__ import annotations

import time as _time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time

from settlement_config.schema import SettlementConfig
from settlement_engines.aggregator import AggregateResult, IncomeLineItem, aggregate
from settlement_engines.amount import calculate_amount
from settlement_engines.audit import AuditRecord, build_audit_record
from settlement_engines.boundaries import compute_boundaries_from_fields
from settlement_engines.classifier import classify_boundaries
from settlement_engines.eligibility import has_eligible_status, settlement_boundaries
from settlement_engines.timestamps import ensure_aware, to_epoch_ms
from settlement_kernel.domain.booking import BookingRecord
from settlement_kernel.domain.clock import Clock
from settlement_kernel.exceptions import MissingBookingDatesError
from settlement_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.revenue")


@dataclass(frozen=True)
class RevenueStatement:
    """Settlement view of a host's bookings at one instant."""

    as_of: datetime
    items: tuple[IncomeLineItem, ...]
    totals: AggregateResult
    skipped_booking_ids: tuple[str | None, ...] = ()

    @property
    def item_count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class VerificationResult:
    """Server-side re-classification of a single booking."""

    audit: AuditRecord
    now_epoch_ms: int


class RevenueService:
    """
    Builds revenue statements for the settlement dashboard.

    Contract:
        Given booking records, return per-booking line items and totals
        computed at the injected clock's current instant.
    Guarantees:
        - No persistence and no money movement; pure read-time computation.
        - Input records are never mutated.
    Non-goals:
        - Does NOT fetch bookings; the caller supplies them.
        - Does NOT schedule payouts.
    """

    def __init__(self, clock: Clock, config: SettlementConfig | None = None):
        self._clock = clock
        self._config = config or SettlementConfig()
        self._policy = self._config.to_policy()

    @property
    def config(self) -> SettlementConfig:
        return self._config

    def build_statement(self, bookings: Sequence[BookingRecord]) -> RevenueStatement:
        """
        Classify and aggregate a host's bookings at the current instant.

        Ineligible bookings (unpaid, cancelled, pending approval, not yet
        checked in) are left out of the statement.
        """
        now = ensure_aware(self._clock.now())
        now_ms = to_epoch_ms(now)
        t0 = _time.monotonic()
        logger.info("revenue_statement_started", extra={
            "booking_count": len(bookings),
            "server_time_ms": now_ms,
        })

        items: list[IncomeLineItem] = []
        skipped: list[str | None] = []

        for record in bookings:
            if not has_eligible_status(record):
                continue
            boundaries = settlement_boundaries(record, policy=self._policy)
            if boundaries is None:
                skipped.append(record.booking_id)
                continue

            state = classify_boundaries(boundaries, now)
            if state is None:
                continue

            audit = build_audit_record(boundaries, now, state)
            with LogContext.bind(booking_id=record.booking_id):
                logger.info("settlement_state_decided", extra={
                    **audit.as_dict(),
                    "server_time_ms": now_ms,
                })

            items.append(IncomeLineItem(
                amount=calculate_amount(record, default_currency=self._config.currency),
                state=state,
                booking_id=record.booking_id,
                property_title=record.property_title,
            ))

        totals = aggregate(items=items, currency=self._config.currency)

        duration_ms = round((_time.monotonic() - t0) * 1000, 2)
        logger.info("revenue_statement_completed", extra={
            "booking_count": len(bookings),
            "item_count": len(items),
            "skipped_count": len(skipped),
            "total_revenue": str(totals.total_revenue.amount),
            "available_balance": str(totals.available_balance.amount),
            "duration_ms": duration_ms,
        })

        return RevenueStatement(
            as_of=now,
            items=tuple(items),
            totals=totals,
            skipped_booking_ids=tuple(skipped),
        )

    def verify(
        self,
        check_in_date: date | str | None,
        check_out_date: date | str | None,
        check_in_time: time | str | None = None,
        check_out_time: time | str | None = None,
    ) -> VerificationResult:
        """
        Re-classify a booking at server time.

        Raises:
            MissingBookingDatesError: If either date is absent.
            InvalidTimestampError: If a date or time is malformed.
        """
        if not check_in_date or not check_out_date:
            raise MissingBookingDatesError(
                str(check_in_date) if check_in_date else None,
                str(check_out_date) if check_out_date else None,
            )

        now = ensure_aware(self._clock.now())
        boundaries = compute_boundaries_from_fields(
            check_in_date,
            check_out_date,
            check_in_time,
            check_out_time,
            policy=self._policy,
        )
        state = classify_boundaries(boundaries, now)
        audit = build_audit_record(boundaries, now, state)
        now_ms = to_epoch_ms(now)

        logger.info("settlement_state_verified", extra={
            **audit.as_dict(),
            "server_time_ms": now_ms,
        })

        return VerificationResult(audit=audit, now_epoch_ms=now_ms)
