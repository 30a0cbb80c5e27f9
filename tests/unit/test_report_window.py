"""Report window and limit parsing."""

from datetime import date, datetime, timedelta, timezone

import pytest

from ledger_kernel.domain.report_window import parse_limit, parse_report_window
from ledger_kernel.exceptions import InvalidLimitError, InvalidReportWindowError


class TestParseReportWindow:
    def test_bare_dates_cover_whole_days(self):
        window = parse_report_window("2020-08-01", "2020-08-15")
        assert window.start == datetime(2020, 8, 1, tzinfo=timezone.utc)
        assert window.end.date() == date(2020, 8, 15)
        assert window.end > datetime(2020, 8, 15, 23, 59, 59, tzinfo=timezone.utc)

    def test_same_day_window(self):
        window = parse_report_window("2020-08-15", "2020-08-15")
        paid_at = datetime(2020, 8, 15, 14, 0, tzinfo=timezone.utc)
        assert window.start <= paid_at <= window.end

    def test_datetime_strings_kept_exact(self):
        window = parse_report_window("2020-08-01T10:00:00", "2020-08-01T12:00:00+00:00")
        assert window.start == datetime(2020, 8, 1, 10, tzinfo=timezone.utc)
        assert window.end == datetime(2020, 8, 1, 12, tzinfo=timezone.utc)

    def test_offsets_normalized_to_utc(self):
        window = parse_report_window("2020-08-01T02:00:00+02:00", "2020-08-02")
        assert window.start == datetime(2020, 8, 1, 0, tzinfo=timezone.utc)

    def test_date_and_datetime_objects(self):
        start = datetime(2020, 8, 1, 8, 0)
        window = parse_report_window(start, date(2020, 8, 1))
        assert window.start.tzinfo is not None
        assert window.end - window.start < timedelta(days=1)

    @pytest.mark.parametrize(
        "start, end",
        [
            (None, "2020-08-01"),
            ("2020-08-01", None),
            ("", "2020-08-01"),
            ("yesterday", "2020-08-01"),
            ("2020-13-01", "2020-12-31"),
            (20200801, "2020-08-02"),
        ],
    )
    def test_rejects_missing_or_malformed(self, start, end):
        with pytest.raises(InvalidReportWindowError):
            parse_report_window(start, end)

    def test_rejects_reversed(self):
        with pytest.raises(InvalidReportWindowError) as exc_info:
            parse_report_window("2020-08-02", "2020-08-01")
        assert exc_info.value.reason == "start is after end"


class TestParseLimit:
    def test_default_when_absent(self):
        assert parse_limit(None, 2) == 2
        assert parse_limit("", 2) == 2

    def test_accepts_int_and_digit_string(self):
        assert parse_limit(3, 2) == 3
        assert parse_limit(" 10 ", 2) == 10

    @pytest.mark.parametrize("raw", [0, -1, "0", "-3", "abc", "2.5", 2.0, True])
    def test_rejects(self, raw):
        with pytest.raises(InvalidLimitError):
            parse_limit(raw, 2)
