"""
Report window parsing.

Pure functions that turn caller input into an inclusive ``[start, end]``
datetime range.  A bare date used as ``end`` covers that whole day, so
``end=2020-08-15`` includes a job paid at 2020-08-15 14:00.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from ledger_kernel.exceptions import InvalidLimitError, InvalidReportWindowError


@dataclass(frozen=True)
class ReportWindow:
    """Inclusive time range for a report query."""

    start: datetime
    end: datetime


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_bound(raw: object, end_of_day: bool) -> datetime | None:
    if isinstance(raw, datetime):
        return _as_utc(raw)
    if isinstance(raw, date):
        return datetime.combine(
            raw, time.max if end_of_day else time.min, tzinfo=timezone.utc
        )
    if isinstance(raw, str) and raw.strip():
        text = raw.strip()
        try:
            if len(text) == 10:
                return _parse_bound(date.fromisoformat(text), end_of_day)
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def parse_report_window(start: object, end: object) -> ReportWindow:
    """
    Build a ReportWindow from caller input.

    Raises:
        InvalidReportWindowError: If either bound is missing or unparseable,
            or if start is after end.
    """
    start_dt = _parse_bound(start, end_of_day=False)
    if start_dt is None:
        raise InvalidReportWindowError(start, end, "start is missing or not a date")
    end_dt = _parse_bound(end, end_of_day=True)
    if end_dt is None:
        raise InvalidReportWindowError(start, end, "end is missing or not a date")
    if start_dt > end_dt:
        raise InvalidReportWindowError(start, end, "start is after end")
    return ReportWindow(start=start_dt, end=end_dt)


def parse_limit(raw: object, default: int) -> int:
    """
    Parse a positive result limit, falling back to default when absent.

    Raises:
        InvalidLimitError: If raw is present but not a positive integer.
    """
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        raise InvalidLimitError(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise InvalidLimitError(raw)
    if value < 1:
        raise InvalidLimitError(raw)
    return value
