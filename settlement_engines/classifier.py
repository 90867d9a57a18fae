"""
Module: settlement_engines.classifier
Responsibility:
    Decide the settlement state of a booking at a given instant.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Every comparison is strict less-than: an instant equal to a boundary
      belongs to the later state.
    - For increasing ``now`` the states visited are
      (None ->) PENDING -> CONFIRMED -> PAYABLE; nothing reverses.

Failure modes:
    - NaiveDatetimeError when ``now`` carries no UTC offset.

Usage:
    from settlement_engines.classifier import classify

    state = classify(check_in, check_out, payable_after, now)
"""

from __future__ import annotations

from datetime import datetime

from settlement_kernel.domain.booking import SettlementState
from settlement_engines.boundaries import BookingBoundaries
from settlement_engines.timestamps import ensure_aware


def classify(
    check_in: datetime,
    check_out: datetime,
    payable_after: datetime,
    now: datetime,
) -> SettlementState | None:
    """
    Classify a booking's revenue at ``now``.

    Returns:
        None before check-in, otherwise the settlement state.
    """
    ensure_aware(now)
    if now < check_in:
        return None
    if now < check_out:
        return SettlementState.PENDING
    if now < payable_after:
        return SettlementState.CONFIRMED
    return SettlementState.PAYABLE


def classify_boundaries(
    boundaries: BookingBoundaries,
    now: datetime,
) -> SettlementState | None:
    """Classify using precomputed booking boundaries."""
    return classify(
        boundaries.check_in,
        boundaries.check_out,
        boundaries.payable_after,
        now,
    )
