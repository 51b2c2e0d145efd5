"""Date manipulation utilities for installment cadences"""

import calendar
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

SATURDAY = 5  # date.weekday()


def today_in(tz: Optional[tzinfo] = None) -> date:
    """Current calendar day in tz, or the host's local day when tz is None"""
    if tz is None:
        return date.today()
    return datetime.now(tz).date()


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the month, leap years included"""
    return calendar.monthrange(year, month)[1]


def days_until_next_saturday(anchor: date) -> int:
    """Days from anchor to the following Saturday, 7 when anchor is a Saturday"""
    days = (SATURDAY - anchor.weekday()) % 7
    return days or 7


def advance_to_next_saturday(anchor: date, agreement: str, is_first: bool) -> date:
    """
    Next weekly or fortnightly due date.

    Always lands on a Saturday strictly after anchor. Fortnightly periods
    after the first skip one Saturday; the first one does not, which gives
    a shorter ramp-up period.
    """
    days = days_until_next_saturday(anchor)
    if agreement == "fortnightly" and not is_first:
        days += 7
    return anchor + timedelta(days=days)


def advance_to_fortnight_anchor(anchor: date) -> date:
    """Next due date alternating between the 15th and the last day of a month"""
    last_day = last_day_of_month(anchor.year, anchor.month)

    if anchor.day < 15:
        return anchor.replace(day=15)
    if anchor.day < last_day:
        return anchor.replace(day=last_day)

    if anchor.month == 12:
        return date(anchor.year + 1, 1, 15)
    return date(anchor.year, anchor.month + 1, 15)


def next_due_date(anchor: date, agreement: str, is_first: bool) -> date:
    """Dispatch to the advancer for the contract's cadence"""
    if agreement == "fifteen_and_last":
        return advance_to_fortnight_anchor(anchor)
    return advance_to_next_saturday(anchor, agreement, is_first)


def to_midnight_iso(day: date, tz: Optional[tzinfo] = None) -> str:
    """ISO-8601 date-time for local midnight of day"""
    return datetime.combine(day, time.min, tzinfo=tz).isoformat()
