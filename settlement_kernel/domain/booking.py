"""
Booking -- the read-only booking shape consumed by the settlement engine.

Responsibility:
    Defines BookingRecord (what the booking-storage collaborator hands us)
    and SettlementState (the lifecycle stage of a booking's revenue).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - BookingRecord is frozen; the engine never mutates or persists it.
    - Monetary fields are non-negative Decimals.
    - Currency, when present, is a supported ISO 4217 code. A record
      without one is priced in the configured settlement currency.

Failure modes:
    - ValueError for negative or non-numeric monetary fields.
    - InvalidCurrencyError for an unknown currency code.
    - Date and time text is NOT validated here; the timestamp composer
      reports malformed values so a single bad record can be excluded
      without failing construction of a whole booking list.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from settlement_kernel.domain.currency import CurrencyRegistry
from settlement_kernel.exceptions import InvalidCurrencyError

PAYMENT_STATUS_PAID = "paid"

BOOKING_STATUS_CONFIRMED = "confirmed"
BOOKING_STATUS_COMPLETED = "completed"
BOOKING_STATUS_PENDING = "pending"

DEFAULT_CURRENCY = "VND"


class SettlementState(str, Enum):
    """
    Lifecycle stage of a booking's revenue.

    A booking whose check-in has not occurred has no state at all; callers
    represent that as ``None``.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PAYABLE = "payable"

    @property
    def rank(self) -> int:
        """Position in the one-way progression pending -> confirmed -> payable."""
        return _STATE_RANK[self]


_STATE_RANK = {
    SettlementState.PENDING: 1,
    SettlementState.CONFIRMED: 2,
    SettlementState.PAYABLE: 3,
}


def _to_amount(field_name: str, value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be numeric, got bool")
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"{field_name} must be numeric, got {value!r}") from e
    if value < 0:
        raise ValueError(f"{field_name} cannot be negative: {value}")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


@dataclass(frozen=True)
class BookingRecord:
    """
    A booking as stored by the booking collaborator.

    Contract:
        Frozen dataclass; consumed read-only by every engine component.
    Guarantees:
        - ``accommodation_total``, ``pet_total``, ``service_fee`` are
          non-negative Decimals or None.
        - ``total_price`` is a non-negative Decimal.
        - Blank time strings are normalized to None so the documented
          defaults apply.
        - ``currency`` is an uppercase ISO 4217 code or None.
    Non-goals:
        - Does not parse dates or times (see settlement_engines.timestamps).
    """

    check_in_date: date | str
    check_out_date: date | str
    check_in_time: time | str | None = None
    check_out_time: time | str | None = None
    payment_status: str = "pending"
    booking_status: str = BOOKING_STATUS_PENDING
    accommodation_total: Decimal | None = None
    pet_total: Decimal | None = None
    total_price: Decimal = Decimal("0")
    service_fee: Decimal | None = None
    currency: str | None = None
    booking_id: str | None = None
    property_title: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "check_in_time", _blank_to_none(self.check_in_time))
        object.__setattr__(self, "check_out_time", _blank_to_none(self.check_out_time))

        for name in ("accommodation_total", "pet_total", "service_fee"):
            object.__setattr__(self, name, _to_amount(name, getattr(self, name)))
        total_price = _to_amount("total_price", self.total_price)
        object.__setattr__(
            self, "total_price", total_price if total_price is not None else Decimal("0")
        )

        if self.currency is not None:
            if not CurrencyRegistry.is_valid(self.currency):
                raise InvalidCurrencyError(str(self.currency))
            object.__setattr__(self, "currency", self.currency.upper().strip())

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAYMENT_STATUS_PAID

    @classmethod
    def from_mapping(
        cls,
        doc: Mapping[str, Any],
        default_currency: str | None = None,
    ) -> BookingRecord:
        """
        Build a record from the collaborator's camelCase booking document.

        ``status`` and ``bookingStatus`` are both accepted for the booking
        status; absent payment or booking status is treated as ``pending``.
        """
        return cls(
            check_in_date=doc.get("checkInDate") or "",
            check_out_date=doc.get("checkOutDate") or "",
            check_in_time=doc.get("checkInTime"),
            check_out_time=doc.get("checkOutTime"),
            payment_status=doc.get("paymentStatus") or "pending",
            booking_status=(
                doc.get("bookingStatus") or doc.get("status") or BOOKING_STATUS_PENDING
            ),
            accommodation_total=doc.get("accommodationTotal"),
            pet_total=doc.get("petTotal"),
            total_price=doc.get("totalPrice") or Decimal("0"),
            service_fee=doc.get("serviceFee"),
            currency=doc.get("currency") or default_currency,
            booking_id=doc.get("id") or doc.get("bookingId"),
            property_title=doc.get("propertyTitle"),
        )
