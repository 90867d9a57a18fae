"""Tests for the per-booking amount calculator."""

from decimal import Decimal

from settlement_engines.amount import calculate_amount
from settlement_kernel.domain.values import Money


class TestCalculateAmount:
    """Tests for calculate_amount."""

    def test_itemized_wins_over_fallback(self, make_booking):
        record = make_booking(
            accommodation_total=100, pet_total=0, total_price=500, service_fee=50,
        )

        assert calculate_amount(record) == Money.of("100", "VND")

    def test_fallback_subtracts_service_fee(self, make_booking):
        record = make_booking(
            accommodation_total=0, pet_total=0, total_price=500, service_fee=50,
        )

        assert calculate_amount(record) == Money.of("450", "VND")

    def test_fallback_is_clamped_at_zero(self, make_booking):
        record = make_booking(
            accommodation_total=None, pet_total=None, total_price=30, service_fee=50,
        )

        assert calculate_amount(record) == Money.of("0", "VND")

    def test_pet_total_alone_counts_as_itemized(self, make_booking):
        record = make_booking(
            accommodation_total=0, pet_total=200, total_price=5000, service_fee=0,
        )

        assert calculate_amount(record) == Money.of("200", "VND")

    def test_accommodation_plus_pet(self, make_booking):
        record = make_booking(accommodation_total=1_000_000, pet_total=150_000)

        assert calculate_amount(record).amount == Decimal("1150000")

    def test_missing_service_fee_defaults_to_zero(self, make_booking):
        record = make_booking(
            accommodation_total=None, pet_total=None, total_price=750, service_fee=None,
        )

        assert calculate_amount(record) == Money.of("750", "VND")

    def test_amount_uses_record_currency(self, make_booking):
        record = make_booking(accommodation_total=Decimal("120.50"), currency="USD")

        assert calculate_amount(record) == Money.of("120.50", "USD")

    def test_record_without_currency_uses_default(self, make_booking):
        record = make_booking(accommodation_total=Decimal("80"), currency=None)

        assert calculate_amount(record, default_currency="USD") == Money.of("80", "USD")
        assert calculate_amount(record) == Money.of("80", "VND")

    def test_record_currency_wins_over_default(self, make_booking):
        record = make_booking(accommodation_total=Decimal("80"), currency="JPY")

        assert calculate_amount(record, default_currency="USD") == Money.of("80", "JPY")
