"""
Typed Exception Hierarchy for the Settlement Engine.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the settlement engine (the revenue dashboard, the verification
endpoint, support tooling) must tell a malformed booking apart from a bug.
Catching by type and reading structured attributes is stable; parsing
message strings is not.

Every exception:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (serialized by the JSON log
     formatter as ``exc_<attribute>`` fields)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    SettlementError (base)
    |
    +-- TimestampError
    |   +-- InvalidTimestampError
    |   +-- NaiveDatetimeError
    |
    +-- BookingRecordError
    |   +-- MissingBookingDatesError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |   +-- CurrencyMismatchError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Timestamp       | INVALID_TIMESTAMP           | Date/time text cannot form an instant
                | NAIVE_DATETIME              | "now" supplied without a UTC offset
----------------|-----------------------------|-----------------------------------------
Booking         | MISSING_BOOKING_DATES       | Check-in or check-out date absent
----------------|-----------------------------|-----------------------------------------
Currency        | INVALID_CURRENCY            | Not a valid ISO 4217 code
                | CURRENCY_MISMATCH           | Mixed currencies in one aggregation
----------------|-----------------------------|-----------------------------------------
Configuration   | CONFIGURATION_ERROR         | Settlement policy file is malformed
"""


class SettlementError(Exception):
    """
    Base exception for all settlement errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "SETTLEMENT_ERROR"


# Timestamp exceptions


class TimestampError(SettlementError):
    """Base exception for timestamp composition errors."""

    code: str = "TIMESTAMP_ERROR"


class InvalidTimestampError(TimestampError):
    """A calendar date and clock time could not be combined into an instant."""

    code: str = "INVALID_TIMESTAMP"

    def __init__(self, date_text: str, time_text: str, reason: str = ""):
        self.date_text = date_text
        self.time_text = time_text
        self.reason = reason
        message = f"Invalid timestamp: date={date_text!r} time={time_text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NaiveDatetimeError(TimestampError):
    """A datetime without tzinfo was supplied where an instant is required."""

    code: str = "NAIVE_DATETIME"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Instant must be timezone-aware, got naive datetime {value}")


# Booking record exceptions


class BookingRecordError(SettlementError):
    """Base exception for booking record shape errors."""

    code: str = "BOOKING_RECORD_ERROR"


class MissingBookingDatesError(BookingRecordError):
    """Check-in or check-out date is missing."""

    code: str = "MISSING_BOOKING_DATES"

    def __init__(self, check_in_date: str | None, check_out_date: str | None):
        self.check_in_date = check_in_date
        self.check_out_date = check_out_date
        super().__init__("check_in_date and check_out_date are required")


# Currency exceptions


class CurrencyError(SettlementError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Invalid ISO 4217 currency code provided."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Invalid ISO 4217 currency code: '{currency}'")


class CurrencyMismatchError(CurrencyError):
    """Attempted operation on mismatched currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str):
        self.currency1 = currency1
        self.currency2 = currency2
        super().__init__(f"Currency mismatch: {currency1} vs {currency2}")


# Configuration exceptions


class ConfigurationError(SettlementError):
    """Settlement configuration could not be loaded or validated."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid settlement configuration in {source}: {detail}")
