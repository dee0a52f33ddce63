"""
Calendar of favorited tenders.

Each tender with both a publication date and a deadline becomes a horizontal
bar from the start of its publication day to the end of its deadline day,
clipped to the displayed month and colored by how close the deadline is.
"""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

from app.core.gateway import DataGateway
from app.core.result import Result, FailureKind
from app.core.utils import dates
from app.modules.timeline import schemas
from app.modules.favorites import services as favorites_services
from app.modules.tenders import pipeline
from app.modules.tenders.services import to_card

logger = logging.getLogger(__name__)

WEEKDAYS = ("seg", "ter", "qua", "qui", "sex", "sáb", "dom")

WARNING_DAYS = 5


def previous_month(month: int, year: int) -> Tuple[int, int]:
    return (12, year - 1) if month == 1 else (month - 1, year)


def next_month(month: int, year: int) -> Tuple[int, int]:
    return (1, year + 1) if month == 12 else (month + 1, year)


def month_days(month: int, year: int, today: date) -> List[schemas.MonthDay]:
    return [
        schemas.MonthDay(
            day=day,
            weekday=WEEKDAYS[date(year, month, day).weekday()],
            is_today=date(year, month, day) == today
        )
        for day in range(1, dates.days_in_month(month, year) + 1)
    ]


def color_class(deadline: datetime, now: datetime) -> Tuple[schemas.ColorClass, Optional[int]]:
    """
    Color of a bar and the days left until its deadline (None once the
    deadline date is in the past).
    """
    days_remaining = dates.calendar_days_until(deadline, now)
    if days_remaining < 0:
        days_remaining = None

    if dates.end_of_day(dates.to_local(deadline).date()) < dates.to_local(now):
        return schemas.ColorClass.EXPIRED, days_remaining
    if days_remaining == 0:
        return schemas.ColorClass.TODAY, days_remaining
    if days_remaining is not None and days_remaining <= WARNING_DAYS:
        return schemas.ColorClass.WARNING, days_remaining
    return schemas.ColorClass.NORMAL, days_remaining


def bar_layout(start: datetime, end: datetime, days_in_month: int) -> Tuple[float, float]:
    """Left edge and width of a bar as fractions of the month width."""
    left = (start.day - 1) / days_in_month
    width = (end.day - start.day + 1) / days_in_month
    return left, width


def project_timeline(tenders: Iterable, month: int, year: int, now: Optional[datetime] = None,
                     include_expired: bool = False) -> List[schemas.TimelineBar]:
    """
    Project tenders onto the bars of one month, ordered by clipped start.

    Tenders missing a publication date or a deadline are never plotted.
    Tenders whose deadline day has fully passed are left out unless
    ``include_expired`` is set, in which case they get the expired color.
    """
    now = dates.to_local(now or dates.now())
    month_start, month_end = dates.month_bounds(month, year)
    total_days = dates.days_in_month(month, year)
    bars = []

    for tender in tenders:
        if tender.publish_date is None or tender.proposal_deadline is None:
            continue

        span_start = dates.start_of_day(dates.to_local(tender.publish_date).date())
        span_end = dates.end_of_day(dates.to_local(tender.proposal_deadline).date())

        start = max(span_start, month_start)
        end = min(span_end, month_end)
        if start > end:
            continue

        color, days_remaining = color_class(tender.proposal_deadline, now)
        if color == schemas.ColorClass.EXPIRED and not include_expired:
            continue

        left, width = bar_layout(start, end, total_days)
        bars.append(schemas.TimelineBar(
            tender_id=tender.id,
            title=tender.title,
            entity=tender.entity,
            start=start,
            end=end,
            days_remaining=days_remaining,
            color_class=color,
            left=left,
            width=width
        ))

    return sorted(bars, key=lambda bar: bar.start)


def build_calendar(gateway: DataGateway, user_id: str, month: Optional[int] = None, year: Optional[int] = None,
                   include_expired: bool = False, selected_id: Optional[str] = None,
                   now: Optional[datetime] = None) -> Result[schemas.CalendarResponse]:
    """
    Calendar page data for one month of the user's favorites.

    Args:
        gateway: Data gateway bound to the request session
        user_id: The ID of the user
        month: 1-based month, defaults to the current one
        year: Year, defaults to the current one
        include_expired: Also plot tenders whose deadline has passed
        selected_id: The single tender whose details are expanded, if any
        now: Reference time, defaults to the current wall-clock time

    Returns:
        Result wrapping a CalendarResponse
    """
    now = dates.to_local(now or dates.now())
    month = month or now.month
    year = year or now.year
    if not 1 <= month <= 12:
        return Result.failure("month must be between 1 and 12", FailureKind.INVALID)

    favorites = favorites_services.list_favorite_tenders(gateway, user_id, order_by="deadline", ascending=True)
    if not favorites.ok:
        return favorites
    tenders = favorites.value

    bars = project_timeline(tenders, month, year, now=now, include_expired=include_expired)
    logger.debug(f"Calendar {month}/{year} for user {user_id}: {len(bars)} bars from {len(tenders)} favorites")

    selected = None
    if selected_id:
        # Only one tender can be expanded at a time
        match = next((tender for tender in tenders if tender.id == selected_id), None)
        if match is None:
            return Result.failure(f"Tender {selected_id} is not a favorite", FailureKind.NOT_FOUND)
        selected = to_card(match, {tender.id for tender in tenders}, now)

    prev_month, prev_year = previous_month(month, year)
    following_month, following_year = next_month(month, year)
    return Result.success(schemas.CalendarResponse(
        month=month,
        year=year,
        days_in_month=dates.days_in_month(month, year),
        days=month_days(month, year, now.date()),
        bars=bars,
        active_favorites_count=pipeline.count_active(tenders, now.date()),
        previous={"month": prev_month, "year": prev_year},
        next={"month": following_month, "year": following_year},
        selected=selected
    ))
