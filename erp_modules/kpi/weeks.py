"""
ISO week helpers for weekly KPI snapshots.

Weeks follow ISO 8601: Monday is the first day and week 1 is the week
containing the year's first Thursday.  A year has 52 or 53 weeks.
"""

from datetime import date, datetime, time, timedelta

from erp_modules.kpi.models import DateRange, WeekRef


def get_week_number(day: date) -> int:
    return day.isocalendar()[1]


def get_iso_week(day: date) -> WeekRef:
    iso = day.isocalendar()
    return WeekRef(week_number=iso[1], year=iso[0])


def weeks_in_year(year: int) -> int:
    # Dec 28 always falls in the last ISO week of its year
    return date(year, 12, 28).isocalendar()[1]


def week_start(week_number: int, year: int) -> date:
    """Monday of ISO ``week_number`` in ``year``."""
    jan4 = date(year, 1, 4)
    first_monday = jan4 - timedelta(days=jan4.isoweekday() - 1)
    return first_monday + timedelta(weeks=week_number - 1)


def get_week_date_range(week_number: int, year: int) -> DateRange:
    start = week_start(week_number, year)
    end = start + timedelta(days=6)
    return DateRange(
        start=datetime.combine(start, time.min),
        end=datetime.combine(end, time.max),
    )


def get_previous_week(week_number: int, year: int) -> WeekRef:
    """The ISO week before the given one; week 1 rolls back to week 52 or 53."""
    if week_number > 1:
        return WeekRef(week_number=week_number - 1, year=year)
    return WeekRef(week_number=weeks_in_year(year - 1), year=year - 1)
