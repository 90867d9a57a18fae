"""
Module: settlement_engines.amount
Responsibility:
    Derive the host-revenue amount of one booking.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Itemized totals (accommodation + pet) win whenever either is positive.
    - Otherwise ``max(0, total_price - service_fee)``; never negative.
    - Service fees are never host revenue.
    - A record without a currency is priced in ``default_currency``.
"""

from __future__ import annotations

from decimal import Decimal

from settlement_kernel.domain.booking import DEFAULT_CURRENCY, BookingRecord
from settlement_kernel.domain.values import Money

_ZERO = Decimal("0")


def calculate_amount(record: BookingRecord, default_currency: str = DEFAULT_CURRENCY) -> Money:
    """Countable revenue for a booking, in the booking's currency."""
    currency = record.currency or default_currency
    accommodation = record.accommodation_total or _ZERO
    pet = record.pet_total or _ZERO
    if accommodation > _ZERO or pet > _ZERO:
        return Money(amount=accommodation + pet, currency=currency)

    fee = record.service_fee or _ZERO
    return Money(amount=max(_ZERO, record.total_price - fee), currency=currency)
