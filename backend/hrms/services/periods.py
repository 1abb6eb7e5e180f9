"""Reporting windows: day, week, month, year and the April-March fiscal year."""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Optional

from ..enums import PeriodKind
from ..errors import ValidationError

MONTH_NAMES = [calendar.month_name[i] for i in range(1, 13)]


@dataclass(frozen=True)
class ReportPeriod:
    """Inclusive date range a report covers."""

    kind: PeriodKind
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def label(self) -> str:
        if self.kind is PeriodKind.MONTH:
            return f"{MONTH_NAMES[self.start.month - 1]} {self.start.year}"
        if self.kind is PeriodKind.YEAR:
            return str(self.start.year)
        return f"{self.start:%d/%m/%Y} - {self.end:%d/%m/%Y}"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""

    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_months(start: date, end: date) -> Iterator[date]:
    """Yield the first day of every month touched by [start, end]."""

    cursor = date(start.year, start.month, 1)
    while cursor <= end:
        yield cursor
        if cursor.month == 12:
            cursor = date(cursor.year + 1, 1, 1)
        else:
            cursor = date(cursor.year, cursor.month + 1, 1)


def report_period(
    kind: PeriodKind | str,
    on_date: Optional[date] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> ReportPeriod:
    """Resolve a period selector into concrete dates.

    ``day`` and ``week`` are anchored on ``on_date`` (weeks start on Monday),
    ``month`` uses ``year``/``month`` and ``year`` covers the calendar year.
    Missing selectors fall back to today.
    """

    try:
        kind = PeriodKind(kind)
    except ValueError as exc:
        raise ValidationError(f"Unknown report period '{kind}'") from exc

    today = date.today()
    anchor = on_date or today

    if kind is PeriodKind.DAY:
        return ReportPeriod(kind, anchor, anchor)
    if kind is PeriodKind.WEEK:
        start = anchor - timedelta(days=anchor.weekday())
        return ReportPeriod(kind, start, start + timedelta(days=6))
    if kind is PeriodKind.MONTH:
        start, end = month_bounds(year or anchor.year, month or anchor.month)
        return ReportPeriod(kind, start, end)

    y = year or anchor.year
    return ReportPeriod(kind, date(y, 1, 1), date(y, 12, 31))


def fiscal_year(start_year: int) -> ReportPeriod:
    """1st April ``start_year`` to 31st March of the following year."""

    return ReportPeriod(PeriodKind.YEAR, date(start_year, 4, 1), date(start_year + 1, 3, 31))


def fiscal_months(start_year: int) -> list[date]:
    """First day of each fiscal month, April through March."""

    return list(iter_months(date(start_year, 4, 1), date(start_year + 1, 3, 31)))
