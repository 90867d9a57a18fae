"""
Module: settlement_engines.aggregator
Responsibility:
    Fold per-booking income line items into a host's total revenue and
    available balance.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - ``total_revenue`` sums every item regardless of state.
    - ``available_balance`` is its own running sum over PAYABLE items; it is
      never derived by subtracting from ``total_revenue``.
    - The fold is addition only, so item order never changes the result
      and ``available_balance <= total_revenue`` always holds.

Failure modes:
    - CurrencyMismatchError when items carry different currencies.
    - ValueError when a line item amount is negative.

Usage:
    from settlement_engines.aggregator import IncomeLineItem, aggregate

    result = aggregate(items=[
        IncomeLineItem(Money.of("100", "VND"), SettlementState.PENDING),
        IncomeLineItem(Money.of("300", "VND"), SettlementState.PAYABLE),
    ])
    result.total_revenue      # 400 VND
    result.available_balance  # 300 VND
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from settlement_kernel.domain.booking import DEFAULT_CURRENCY, SettlementState
from settlement_kernel.domain.values import Money
from settlement_kernel.logging_config import get_logger
from settlement_engines.tracer import traced_engine

logger = get_logger("engines.aggregator")


@dataclass(frozen=True)
class IncomeLineItem:
    """
    Revenue of one eligible booking at the time of the query.

    Contract:
        Computed fresh on every query; never stored.
    Guarantees:
        - ``amount`` is non-negative.
    """

    amount: Money
    state: SettlementState
    booking_id: str | None = None
    property_title: str | None = None

    def __post_init__(self) -> None:
        if self.amount.is_negative:
            raise ValueError(f"Line item amount cannot be negative: {self.amount}")
        if not isinstance(self.state, SettlementState):
            object.__setattr__(self, "state", SettlementState(self.state))


@dataclass(frozen=True)
class AggregateResult:
    """Host totals: lifetime revenue and the balance available for payout."""

    total_revenue: Money
    available_balance: Money

    @property
    def unavailable_amount(self) -> Money:
        """Revenue still in stay or awaiting the payout delay."""
        return self.total_revenue - self.available_balance


@traced_engine("aggregator", "1.0", fingerprint_fields=("items", "currency"))
def aggregate(
    items: Sequence[IncomeLineItem],
    currency: str = DEFAULT_CURRENCY,
) -> AggregateResult:
    """
    Fold line items into totals.

    Args:
        items: Line items of eligible bookings, in any order.
        currency: Currency of the zero totals when ``items`` is empty.
            Otherwise the sums run in the first item's currency.
    """
    if items:
        currency = items[0].amount.currency.code
    total_revenue = Money.zero(currency)
    available_balance = Money.zero(currency)

    for item in items:
        total_revenue = total_revenue + item.amount
        if item.state is SettlementState.PAYABLE:
            available_balance = available_balance + item.amount

    logger.debug("income_aggregated", extra={
        "item_count": len(items),
        "total_revenue": str(total_revenue.amount),
        "available_balance": str(available_balance.amount),
        "currency": total_revenue.currency.code,
    })

    return AggregateResult(
        total_revenue=total_revenue,
        available_balance=available_balance,
    )
