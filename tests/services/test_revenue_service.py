"""
Tests for RevenueService.

Covers:
- The check-in to payout walk-through for one booking
- Mixed portfolios: exclusions, skipped records, totals
- Audit log records per decided state
- Server-side verification
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from settlement_config import SettlementConfig
from settlement_kernel.domain.booking import BookingRecord, SettlementState
from settlement_kernel.domain.clock import DeterministicClock
from settlement_kernel.domain.values import Money
from settlement_kernel.exceptions import (
    CurrencyMismatchError,
    InvalidTimestampError,
    MissingBookingDatesError,
)
from settlement_services import RevenueService

ICT = timezone(timedelta(hours=7))


def ict(year, month, day, hour=0, minute=0, second=0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=ICT)


@pytest.fixture
def service(clock):
    return RevenueService(clock)


class TestSettlementWalkthrough:
    """A 2026-01-10 14:00 -> 2026-01-12 12:00 stay worth 1,000,000 VND."""

    @pytest.fixture
    def booking(self, make_booking):
        return make_booking(accommodation_total=Decimal("1000000"), pet_total=Decimal("0"))

    def test_mid_stay_is_pending(self, service, clock, booking):
        clock.set_time(ict(2026, 1, 11))

        statement = service.build_statement([booking])

        assert [i.state for i in statement.items] == [SettlementState.PENDING]
        assert statement.totals.total_revenue == Money.of("1000000", "VND")
        assert statement.totals.available_balance == Money.zero("VND")

    def test_at_check_out_is_confirmed(self, service, clock, booking):
        clock.set_time(ict(2026, 1, 12, 12, 0))

        statement = service.build_statement([booking])

        assert statement.items[0].state is SettlementState.CONFIRMED
        assert statement.totals.available_balance == Money.zero("VND")

    def test_one_second_before_payout_is_confirmed(self, service, clock, booking):
        clock.set_time(ict(2026, 1, 13, 11, 59, 59))

        statement = service.build_statement([booking])

        assert statement.items[0].state is SettlementState.CONFIRMED

    def test_twenty_four_hours_after_check_out_is_payable(self, service, clock, booking):
        clock.set_time(ict(2026, 1, 13, 12, 0))

        statement = service.build_statement([booking])

        assert statement.items[0].state is SettlementState.PAYABLE
        assert statement.totals.total_revenue == Money.of("1000000", "VND")
        assert statement.totals.available_balance == Money.of("1000000", "VND")

    def test_before_check_in_not_listed(self, service, clock, booking):
        clock.set_time(ict(2026, 1, 10, 13, 59, 59))

        statement = service.build_statement([booking])

        assert statement.items == ()
        assert statement.totals.total_revenue.is_zero


class TestBuildStatement:
    """Tests for mixed booking lists."""

    def test_portfolio_totals(self, service, clock, make_booking):
        clock.set_time(ict(2026, 1, 20))
        bookings = [
            make_booking(booking_id="payable", accommodation_total=300, pet_total=0),
            make_booking(
                booking_id="confirmed",
                check_in_date="2026-01-17", check_out_date="2026-01-19",
                check_out_time="12:00",
                accommodation_total=200, pet_total=0,
            ),
            make_booking(
                booking_id="pending",
                check_in_date="2026-01-19", check_out_date="2026-01-22",
                accommodation_total=100, pet_total=0,
            ),
            make_booking(booking_id="unpaid", payment_status="pending"),
            make_booking(booking_id="cancelled", booking_status="cancelled"),
            make_booking(booking_id="future", check_in_date="2026-02-01", check_out_date="2026-02-02"),
        ]

        statement = service.build_statement(bookings)

        assert {i.booking_id: i.state for i in statement.items} == {
            "payable": SettlementState.PAYABLE,
            "confirmed": SettlementState.CONFIRMED,
            "pending": SettlementState.PENDING,
        }
        assert statement.totals.total_revenue == Money.of("600", "VND")
        assert statement.totals.available_balance == Money.of("300", "VND")
        assert statement.as_of == ict(2026, 1, 20)

    def test_bad_record_does_not_block_others(self, service, clock, make_booking):
        clock.set_time(ict(2026, 2, 1))
        bookings = [
            make_booking(booking_id="ok", accommodation_total=500, pet_total=0),
            make_booking(booking_id="bad", check_out_time="noon"),
        ]

        statement = service.build_statement(bookings)

        assert [i.booking_id for i in statement.items] == ["ok"]
        assert statement.skipped_booking_ids == ("bad",)
        assert statement.totals.available_balance == Money.of("500", "VND")

    def test_unpaid_bad_record_is_not_reported_as_skipped(self, service, clock, make_booking):
        clock.set_time(ict(2026, 2, 1))

        statement = service.build_statement([make_booking(payment_status="pending", check_in_date="x")])

        assert statement.skipped_booking_ids == ()

    def test_line_item_carries_display_fields(self, service, clock, make_booking):
        statement = service.build_statement([make_booking(property_title="Riverside loft")])

        assert statement.items[0].property_title == "Riverside loft"
        assert statement.item_count == 1

    def test_input_records_unchanged(self, service, make_booking):
        record = make_booking()
        before = repr(record)

        service.build_statement([record])

        assert repr(record) == before

    def test_mixed_currencies_rejected(self, service, clock, make_booking):
        clock.set_time(ict(2026, 2, 1))
        bookings = [make_booking(), make_booking(booking_id="usd", currency="USD", accommodation_total=10)]

        with pytest.raises(CurrencyMismatchError):
            service.build_statement(bookings)

    def test_config_currency_used_for_empty_statement(self, clock):
        service = RevenueService(clock, SettlementConfig(currency="USD"))

        statement = service.build_statement([])

        assert statement.totals.total_revenue == Money.zero("USD")

    def test_records_without_currency_use_configured_currency(self, clock):
        clock.set_time(ict(2026, 2, 1))
        service = RevenueService(clock, SettlementConfig(currency="USD"))
        record = BookingRecord.from_mapping({
            "id": "bk-usd",
            "checkInDate": "2026-01-10",
            "checkOutDate": "2026-01-12",
            "paymentStatus": "paid",
            "status": "confirmed",
            "accommodationTotal": 100,
        })

        statement = service.build_statement([record])

        assert statement.items[0].amount == Money.of("100", "USD")
        assert statement.totals.available_balance == Money.of("100", "USD")

    def test_explicit_record_currency_kept_under_other_config(self, clock, make_booking):
        clock.set_time(ict(2026, 2, 1))
        service = RevenueService(clock, SettlementConfig(currency="USD"))

        statement = service.build_statement([make_booking(currency="VND", accommodation_total=500)])

        assert statement.totals.total_revenue == Money.of("500", "VND")

    def test_logs_state_decision_per_booking(self, service, clock, make_booking, captured_logs):
        clock.set_time(ict(2026, 1, 13, 12, 0))

        service.build_statement([make_booking(booking_id="bk-9")])

        decided = [r for r in captured_logs() if r["message"] == "settlement_state_decided"]
        assert len(decided) == 1
        assert decided[0]["booking_id"] == "bk-9"
        assert decided[0]["state"] == "payable"
        assert decided[0]["payable_after_utc"] == "2026-01-13T05:00:00.000Z"
        assert decided[0]["server_time_ms"] == 1_768_280_400_000

    def test_logs_completion_summary(self, service, make_booking, captured_logs):
        service.build_statement([make_booking()])

        completed = [r for r in captured_logs() if r["message"] == "revenue_statement_completed"]
        assert completed[-1]["item_count"] == 1
        assert completed[-1]["total_revenue"] == "1000000"


    def test_malformed_record_logged_once(self, service, clock, make_booking, captured_logs):
        clock.set_time(ict(2026, 2, 1))

        service.build_statement([make_booking(booking_id="bad", check_out_time="noon")])

        excluded = [r for r in captured_logs() if r["message"] == "booking_excluded_invalid_timestamp"]
        assert [r["booking_id"] for r in excluded] == ["bad"]

    def test_lenient_fallback_logged_once_per_record(self, clock, make_booking, captured_logs):
        service = RevenueService(clock, SettlementConfig(strict_timestamps=False))

        statement = service.build_statement([make_booking(check_in_date="garbage")])

        fallbacks = [r for r in captured_logs() if r["message"] == "timestamp_fallback_to_epoch"]
        assert len(fallbacks) == 1
        assert statement.items[0].state is SettlementState.PENDING

    def test_reversed_stay_warned_once(self, service, clock, make_booking, captured_logs):
        clock.set_time(ict(2026, 1, 20))

        service.build_statement([make_booking(check_in_date="2026-01-12", check_out_date="2026-01-10")])

        warnings = [r for r in captured_logs() if r["message"] == "boundaries_check_out_before_check_in"]
        assert len(warnings) == 1

class TestVerify:
    """Tests for server-side verification."""

    def test_returns_audit_and_server_time(self, clock):
        clock.set_time(ict(2026, 1, 12, 12, 0))
        service = RevenueService(clock)

        result = service.verify("2026-01-10", "2026-01-12")

        assert result.audit.state is SettlementState.CONFIRMED
        assert result.audit.check_in_utc == "2026-01-10T07:00:00.000Z"
        assert result.now_epoch_ms == 1_768_194_000_000

    def test_explicit_times(self, clock):
        clock.set_time(ict(2026, 1, 10, 15, 0))
        service = RevenueService(clock)

        result = service.verify("2026-01-10", "2026-01-12", "16:00", "10:00")

        assert result.audit.state is None
        assert result.audit.check_out_utc == "2026-01-12T03:00:00.000Z"

    @pytest.mark.parametrize("check_in, check_out", [(None, "2026-01-12"), ("2026-01-10", "")])
    def test_missing_dates_raise(self, service, check_in, check_out):
        with pytest.raises(MissingBookingDatesError) as exc_info:
            service.verify(check_in, check_out)

        assert exc_info.value.code == "MISSING_BOOKING_DATES"

    def test_invalid_timestamp_raises(self, service):
        with pytest.raises(InvalidTimestampError):
            service.verify("2026-01-10", "2026-01-12", "99:00")

    def test_uses_injected_clock(self):
        clock = DeterministicClock(ict(2026, 1, 13, 11, 59, 59))
        service = RevenueService(clock)

        assert service.verify("2026-01-10", "2026-01-12").audit.state is SettlementState.CONFIRMED
        clock.advance(1000)
        assert service.verify("2026-01-10", "2026-01-12").audit.state is SettlementState.PAYABLE
