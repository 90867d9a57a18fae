"""
Module: settlement_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the booking
    settlement engine.  This is the canonical import surface for
    settlement_services and any presentation layer.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settlement_kernel (and sibling engine modules).
    MUST NOT import settlement_services or settlement_config.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()``; the current instant is
      always an explicit parameter supplied by the caller.
    - Decimal-only arithmetic: all monetary amounts are ``Money``.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from settlement_engines import (
        compute_boundaries, classify_boundaries, is_eligible,
        calculate_amount, aggregate, IncomeLineItem,
    )
"""

from settlement_kernel.logging_config import get_logger

logger = get_logger("engines")

from settlement_engines.aggregator import (
    AggregateResult,
    IncomeLineItem,
    aggregate,
)
from settlement_engines.amount import calculate_amount
from settlement_engines.audit import (
    AuditRecord,
    build_audit_record,
    format_utc,
)
from settlement_engines.boundaries import (
    DEFAULT_CHECK_IN_TIME,
    DEFAULT_CHECK_OUT_TIME,
    DEFAULT_POLICY,
    PAYOUT_DELAY,
    PAYOUT_DELAY_MS,
    BookingBoundaries,
    SettlementPolicy,
    compute_boundaries,
    compute_boundaries_from_fields,
)
from settlement_engines.classifier import classify, classify_boundaries
from settlement_engines.eligibility import (
    ELIGIBLE_BOOKING_STATUSES,
    filter_eligible,
    has_eligible_status,
    is_eligible,
    settlement_boundaries,
)
from settlement_engines.timestamps import (
    EPOCH,
    INDOCHINA_TIME,
    compose_instant,
    ensure_aware,
    from_epoch_ms,
    parse_utc_offset,
    to_epoch_ms,
)

__all__ = [
    # Timestamps
    "EPOCH",
    "INDOCHINA_TIME",
    "compose_instant",
    "ensure_aware",
    "from_epoch_ms",
    "parse_utc_offset",
    "to_epoch_ms",
    # Boundaries
    "DEFAULT_CHECK_IN_TIME",
    "DEFAULT_CHECK_OUT_TIME",
    "DEFAULT_POLICY",
    "PAYOUT_DELAY",
    "PAYOUT_DELAY_MS",
    "BookingBoundaries",
    "SettlementPolicy",
    "compute_boundaries",
    "compute_boundaries_from_fields",
    # Classifier
    "classify",
    "classify_boundaries",
    # Eligibility
    "ELIGIBLE_BOOKING_STATUSES",
    "filter_eligible",
    "has_eligible_status",
    "is_eligible",
    "settlement_boundaries",
    # Amount
    "calculate_amount",
    # Aggregator
    "AggregateResult",
    "IncomeLineItem",
    "aggregate",
    # Audit
    "AuditRecord",
    "build_audit_record",
    "format_utc",
]
