"""
Pure domain layer.

Value objects and the booking record shape, with NO dependencies on:
- Storage
- Time/clock reads (Clock is an interface; only SystemClock touches time)
- I/O

All domain objects are immutable and deterministic.
"""

from settlement_kernel.domain.booking import (
    BookingRecord,
    SettlementState,
)
from settlement_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from settlement_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from settlement_kernel.domain.values import Currency, Money

__all__ = [
    "BookingRecord",
    "SettlementState",
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "CurrencyInfo",
    "CurrencyRegistry",
    "Currency",
    "Money",
]
