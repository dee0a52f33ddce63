"""
Tender listing pipeline shared by every endpoint that lists tenders.

Stages run in a fixed order on an already fetched (and, for free-text search,
already narrowed) collection:

1. status partition (active / expired), dropping tenders without a deadline
2. custom filter matching, OR across filters and AND within one filter
3. sort on a single (field, direction) key

All functions are pure and work on any object exposing the tender attributes,
ORM rows included.
"""

import logging
import re
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from app.core.utils import dates
from app.modules.tenders.schemas import SortDirection, SortField, TenderStatus, TimeRemaining, UrgencyLevel

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

KEYWORD_FIELDS = ("title", "entity", "single_factor_criterion", "multi_factor_criterion")


def is_active(tender, today: date) -> bool:
    deadline = tender.proposal_deadline
    if deadline is None:
        return False
    return dates.to_local(deadline).date() >= today


def is_expired(tender, today: date) -> bool:
    deadline = tender.proposal_deadline
    if deadline is None:
        return False
    return dates.to_local(deadline).date() < today


def partition(tenders: Iterable, status: TenderStatus, today: date) -> List:
    """Keep the tenders in one status bucket. No-deadline tenders are in neither."""
    predicate = is_active if TenderStatus(status) == TenderStatus.ACTIVE else is_expired
    return [tender for tender in tenders if predicate(tender, today)]


def count_active(tenders: Iterable, today: date) -> int:
    return sum(1 for tender in tenders if is_active(tender, today))


def _searchable_text(tender) -> str:
    return " ".join((getattr(tender, name, None) or "") for name in KEYWORD_FIELDS).lower()


def matches_filter(tender, custom_filter) -> bool:
    """
    All conditions the filter sets must hold. A filter that sets none matches
    every tender.
    """
    district = getattr(custom_filter, "district", None)
    if district and tender.district != district:
        return False

    municipalities = getattr(custom_filter, "municipalities", None)
    if municipalities and tender.municipality not in municipalities:
        return False

    keywords = getattr(custom_filter, "keywords", None)
    if keywords:
        text = _searchable_text(tender)
        if not any(keyword.lower() in text for keyword in keywords):
            return False

    return True


def apply_filters(tenders: Iterable, custom_filters: Sequence) -> List:
    """Tenders matching at least one filter. No filters selected keeps everything."""
    tenders = list(tenders)
    if not custom_filters:
        return tenders
    return [tender for tender in tenders if any(matches_filter(tender, f) for f in custom_filters)]


def parse_procedure_number(value: Optional[str]) -> int:
    """
    Leading integer of a procedure number ("123/2024" -> 123). Anything that
    does not start with digits counts as 0, so such tenders cluster together.
    """
    if not value:
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def _timestamp(value: Optional[datetime]) -> datetime:
    return dates.to_local(value) if value is not None else datetime.min


def _sort_key(field: SortField):
    field = SortField(field)
    if field == SortField.DEADLINE:
        return lambda tender: _timestamp(tender.proposal_deadline)
    if field == SortField.PUBLISH_DATE:
        return lambda tender: _timestamp(tender.publish_date)
    return lambda tender: parse_procedure_number(tender.procedure_number)


def sort_tenders(tenders: Iterable, field: SortField = SortField.DEADLINE,
                 direction: SortDirection = SortDirection.ASC) -> List:
    # sorted() is stable in both directions, so ties keep their fetch order
    return sorted(tenders, key=_sort_key(field), reverse=SortDirection(direction) == SortDirection.DESC)


def run(tenders: Iterable, status: TenderStatus, custom_filters: Sequence = (),
        sort_field: SortField = SortField.DEADLINE, sort_direction: SortDirection = SortDirection.ASC,
        today: Optional[date] = None) -> List:
    """Partition, filter and sort a fetched tender collection."""
    today = today or dates.today()
    selected = partition(tenders, status, today)
    selected = apply_filters(selected, custom_filters)
    result = sort_tenders(selected, sort_field, sort_direction)
    logger.debug(f"Pipeline kept {len(result)} tenders (status={status}, filters={len(custom_filters)})")
    return result


def time_remaining(deadline: Optional[datetime], now: Optional[datetime] = None) -> Optional[TimeRemaining]:
    """Countdown label for a tender card, in calendar days from today."""
    if deadline is None:
        return None
    days = dates.calendar_days_until(deadline, now or dates.now())
    if days < 0:
        return TimeRemaining(days=days, text="Prazo expirado", level=UrgencyLevel.EXPIRED)
    if days == 0:
        return TimeRemaining(days=days, text="Expira hoje", level=UrgencyLevel.TODAY)
    if days == 1:
        return TimeRemaining(days=days, text="Expira amanhã", level=UrgencyLevel.SOON)
    if days <= 7:
        return TimeRemaining(days=days, text=f"Faltam {days} dias", level=UrgencyLevel.SOON)
    return TimeRemaining(days=days, text=f"Faltam {days} dias", level=UrgencyLevel.NORMAL)


def award_criteria(tender) -> List[str]:
    if tender.single_factor_criterion:
        return [tender.single_factor_criterion]
    if tender.multi_factor_criterion:
        return [part.strip() for part in tender.multi_factor_criterion.split("|") if part.strip()]
    return []
