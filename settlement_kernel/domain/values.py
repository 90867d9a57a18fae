"""
Values -- Immutable, self-validating monetary value objects.

Responsibility:
    Provides Currency and Money, the types every settlement amount is carried
    in. A host's revenue is always an amount paired with its currency.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    No outward dependencies except settlement_kernel.domain.currency.

Invariants enforced:
    - Amounts are Decimal, never float.
    - Currency codes are validated against CurrencyRegistry at construction.
    - Arithmetic never mixes currencies silently.

Failure modes:
    - InvalidCurrencyError on an unknown currency code.
    - ValueError on an amount that cannot be converted to Decimal.
    - CurrencyMismatchError when arithmetic mixes currencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from settlement_kernel.domain.currency import CurrencyRegistry
from settlement_kernel.exceptions import CurrencyMismatchError, InvalidCurrencyError


@dataclass(frozen=True, slots=True)
class Currency:
    """
    ISO 4217 currency code value object.

    Contract:
        Wraps a three-letter code. Validated and normalized (uppercased)
        on construction.

    Guarantees:
        - Immutable and hashable
        - code is always uppercase and stripped of whitespace
    """

    code: str

    def __post_init__(self) -> None:
        normalized = self.code.upper().strip() if isinstance(self.code, str) else ""
        if not CurrencyRegistry.is_valid(normalized):
            raise InvalidCurrencyError(str(self.code))
        object.__setattr__(self, "code", normalized)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"


@dataclass(frozen=True, slots=True)
class Money:
    """
    A Decimal amount in one currency.

    Arithmetic and ordering are defined only between amounts of the same
    currency; anything else raises ``CurrencyMismatchError``.  Nothing is
    converted and nothing is rounded.
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if isinstance(self.amount, float):
            raise TypeError("Money amounts must not be float")
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except (InvalidOperation, ValueError) as e:
                raise ValueError(f"Invalid amount: {self.amount!r}") from e
        if not self.amount.is_finite():
            raise ValueError(f"Invalid amount: {self.amount!r}")

        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", Currency(self.currency))
        elif not isinstance(self.currency, Currency):
            raise TypeError(f"currency must be Currency or str, got {type(self.currency)}")

    @classmethod
    def of(cls, amount: Decimal | str | int, currency: str | Currency) -> Money:
        return cls(amount=amount, currency=currency)

    @classmethod
    def zero(cls, currency: str | Currency) -> Money:
        return cls(amount=Decimal("0"), currency=currency)

    @property
    def is_zero(self) -> bool:
        return self.amount.is_zero()

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def _other_amount(self, other: Money) -> Decimal:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency.code, other.currency.code)
        return other.amount

    def __add__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + self._other_amount(other), self.currency)

    def __sub__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount - self._other_amount(other), self.currency)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount < self._other_amount(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount <= self._other_amount(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount > self._other_amount(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount >= self._other_amount(other)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
