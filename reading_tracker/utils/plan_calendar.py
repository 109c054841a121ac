"""Plan-relative day arithmetic.

Every place that needs "which plan day is it" goes through
``day_number_for_date``. Day 1 is the plan start date; the index grows by one
at each local midnight.
"""
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

PLAN_LENGTH_DAYS = 365


def plan_start_for(day: date) -> date:
    """Return the default plan start (January 1) for the year containing ``day``."""
    return date(day.year, 1, 1)


def day_number_for_date(day: date, plan_start: Optional[date] = None) -> int:
    """Return the 1-based plan day index of ``day``.

    Values below 1 mean the plan has not started yet. The result is not
    clamped, so Dec 31 of a leap year yields 366 when the plan starts on Jan 1.
    """
    start = plan_start or plan_start_for(day)
    return (day - start).days + 1


def today_in_timezone(tz_name: str = "UTC") -> date:
    """Return today's calendar date in the given IANA time zone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def current_day_number(
    tz_name: str = "UTC",
    plan_start: Optional[date] = None,
    today: Optional[date] = None,
) -> int:
    """Return the plan day index for "today" in ``tz_name``."""
    current = today or today_in_timezone(tz_name)
    return day_number_for_date(current, plan_start)
