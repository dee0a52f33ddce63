# tests/test_dates.py

from datetime import date, datetime, timezone

from app.core.config import settings
from app.core.utils import dates

def test_aware_datetimes_are_converted_to_local_wall_clock():
    assert settings.TIMEZONE == "Europe/Lisbon"
    # Lisbon is on UTC+1 in summer
    value = datetime(2024, 7, 1, 23, 30, tzinfo=timezone.utc)
    assert dates.to_local(value) == datetime(2024, 7, 2, 0, 30)

def test_naive_datetimes_are_taken_as_local():
    value = datetime(2024, 7, 1, 23, 30)
    assert dates.to_local(value) is value
    assert dates.to_local(None) is None

def test_calendar_days_ignore_the_time_of_day():
    assert dates.calendar_days_until(datetime(2024, 3, 16, 0, 1), datetime(2024, 3, 15, 23, 59)) == 1
    assert dates.calendar_days_until(datetime(2024, 3, 15, 0, 0), datetime(2024, 3, 15, 23, 59)) == 0

def test_today_from_reference_time():
    assert dates.today(datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 15)

def test_month_bounds_in_leap_year():
    start, end = dates.month_bounds(2, 2024)
    assert start == datetime(2024, 2, 1)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999)
    assert dates.days_in_month(2, 2023) == 28
