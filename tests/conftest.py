"""
Pytest fixtures for the settlement test suite.

Provides:
- Structured logging configured once per session
- Captured settlement log records as parsed JSON dicts
- A deterministic clock and a booking record factory
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from io import StringIO

import pytest

from settlement_kernel.domain.booking import BookingRecord
from settlement_kernel.domain.clock import DeterministicClock
from settlement_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

ICT = timezone(timedelta(hours=7))


def ict(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Wall-clock instant in Indochina Time."""
    return datetime(year, month, day, hour, minute, second, tzinfo=ICT)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture settlement logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ...
            logs = captured_logs()
            assert any(r["message"] == "revenue_statement_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("settlement")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def clock():
    """Deterministic clock fixed at 2026-01-11T00:00:00+07:00."""
    return DeterministicClock(ict(2026, 1, 11))


@pytest.fixture
def make_booking():
    """
    Factory for paid, confirmed bookings staying 2026-01-10 -> 2026-01-12.

    Any BookingRecord field can be overridden by keyword.
    """

    def _make(**overrides) -> BookingRecord:
        fields = {
            "check_in_date": "2026-01-10",
            "check_out_date": "2026-01-12",
            "check_in_time": "14:00",
            "check_out_time": "12:00",
            "payment_status": "paid",
            "booking_status": "confirmed",
            "accommodation_total": Decimal("1000000"),
            "pet_total": Decimal("0"),
            "total_price": Decimal("1100000"),
            "service_fee": Decimal("100000"),
            "booking_id": "bk-1",
        }
        fields.update(overrides)
        return BookingRecord(**fields)

    return _make
