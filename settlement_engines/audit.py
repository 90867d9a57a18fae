"""
Module: settlement_engines.audit
Responsibility:
    Render a booking's boundaries, the comparison instant and the resulting
    state as UTC text for logs and support tooling.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Output only: the classifier, eligibility filter and aggregator never
    read an AuditRecord.

Invariants enforced:
    - Every instant is rendered as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from settlement_kernel.domain.booking import SettlementState
from settlement_engines.boundaries import BookingBoundaries
from settlement_engines.timestamps import ensure_aware


def format_utc(instant: datetime) -> str:
    """UTC calendar-and-clock text with millisecond precision."""
    utc = ensure_aware(instant).astimezone(timezone.utc)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class AuditRecord:
    """Diagnostic snapshot of one classification."""

    check_in_utc: str
    check_out_utc: str
    payable_after_utc: str
    now_utc: str
    state: SettlementState | None

    def as_dict(self) -> dict[str, Any]:
        return {
            "check_in_utc": self.check_in_utc,
            "check_out_utc": self.check_out_utc,
            "payable_after_utc": self.payable_after_utc,
            "now_utc": self.now_utc,
            "state": self.state.value if self.state is not None else None,
        }


def build_audit_record(
    boundaries: BookingBoundaries,
    now: datetime,
    state: SettlementState | None,
) -> AuditRecord:
    """Bundle the rendered instants with an already-computed state."""
    return AuditRecord(
        check_in_utc=format_utc(boundaries.check_in),
        check_out_utc=format_utc(boundaries.check_out),
        payable_after_utc=format_utc(boundaries.payable_after),
        now_utc=format_utc(now),
        state=state,
    )
