"""Tests for the audit formatter."""

from datetime import datetime, timedelta, timezone

import pytest

from settlement_engines.audit import build_audit_record, format_utc
from settlement_engines.boundaries import compute_boundaries_from_fields
from settlement_engines.classifier import classify_boundaries
from settlement_kernel.domain.booking import SettlementState
from settlement_kernel.exceptions import NaiveDatetimeError

ICT = timezone(timedelta(hours=7))


class TestFormatUtc:
    """Tests for format_utc."""

    def test_converts_to_utc_with_z_suffix(self):
        assert format_utc(datetime(2026, 1, 10, 14, 0, tzinfo=ICT)) == "2026-01-10T07:00:00.000Z"

    def test_crosses_day_boundary(self):
        assert format_utc(datetime(2026, 1, 1, 3, 0, tzinfo=ICT)) == "2025-12-31T20:00:00.000Z"

    def test_millisecond_precision(self):
        instant = datetime(2026, 1, 1, 0, 0, 0, 123999, tzinfo=timezone.utc)

        assert format_utc(instant) == "2026-01-01T00:00:00.123Z"

    def test_naive_rejected(self):
        with pytest.raises(NaiveDatetimeError):
            format_utc(datetime(2026, 1, 1))


class TestBuildAuditRecord:
    """Tests for build_audit_record."""

    def test_renders_all_instants(self):
        boundaries = compute_boundaries_from_fields("2026-01-10", "2026-01-12", "14:00", "12:00")
        now = datetime(2026, 1, 13, 12, 0, tzinfo=ICT)

        record = build_audit_record(boundaries, now, classify_boundaries(boundaries, now))

        assert record.check_in_utc == "2026-01-10T07:00:00.000Z"
        assert record.check_out_utc == "2026-01-12T05:00:00.000Z"
        assert record.payable_after_utc == "2026-01-13T05:00:00.000Z"
        assert record.now_utc == "2026-01-13T05:00:00.000Z"
        assert record.state is SettlementState.PAYABLE

    def test_as_dict_with_no_state(self):
        boundaries = compute_boundaries_from_fields("2026-01-10", "2026-01-12")
        now = datetime(2026, 1, 1, tzinfo=ICT)

        payload = build_audit_record(boundaries, now, None).as_dict()

        assert payload["state"] is None
        assert payload["now_utc"] == "2025-12-31T17:00:00.000Z"
