"""
Wall-clock date handling.

Every "today" comparison in the service goes through this module: both sides
are converted to naive datetimes in the configured timezone and truncated to
midnight before comparing calendar dates. Naive datetimes read from the
database are taken to already be in that timezone.
"""

import calendar
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings

END_OF_DAY = time(23, 59, 59, 999999)


def _zone() -> Optional[ZoneInfo]:
    return ZoneInfo(settings.TIMEZONE) if settings.TIMEZONE else None


def to_local(value: Optional[datetime]) -> Optional[datetime]:
    """Convert a datetime to a naive local wall-clock datetime."""
    if value is None:
        return None
    if value.tzinfo is not None:
        zone = _zone()
        value = value.astimezone(zone) if zone else value.astimezone()
        value = value.replace(tzinfo=None)
    return value


def now() -> datetime:
    zone = _zone()
    if zone is None:
        return datetime.now()
    return datetime.now(zone).replace(tzinfo=None)


def today(current: Optional[datetime] = None) -> date:
    return to_local(current or now()).date()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def calendar_days_until(deadline: datetime, current: datetime) -> int:
    """Days between the two calendar dates, both truncated to midnight."""
    return (to_local(deadline).date() - to_local(current).date()).days


def month_bounds(month: int, year: int):
    """First instant and last instant of a month. ``month`` is 1-based."""
    days_in_month = calendar.monthrange(year, month)[1]
    return start_of_day(date(year, month, 1)), end_of_day(date(year, month, days_in_month))


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]
