import logging
from typing import Optional, List, Iterable, Set
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from app.core.gateway import DataGateway
from app.core.result import Result, FailureKind
from app.core.utils import dates
from app.modules.auth.services import AuthContext
from app.modules.favorites import services as favorites_services
from app.modules.tenders import pipeline, schemas

# Configure logging
logger = logging.getLogger(__name__)

def to_card(tender, favorites: Set[str] = frozenset(), now: Optional[datetime] = None) -> schemas.TenderCard:
    """
    Build the display schema for a tender row.
    """
    card = schemas.TenderCard.model_validate(tender)
    card.award_criteria = pipeline.award_criteria(tender)
    card.time_remaining = pipeline.time_remaining(tender.proposal_deadline, now)
    card.is_favorite = tender.id in favorites
    return card

def _favorites_for(gateway: DataGateway, context: Optional[AuthContext]) -> Set[str]:
    if context is None:
        return set()
    result = favorites_services.list_favorites(gateway, context.user_id)
    return result.value if result.ok else set()

def _selected_filters(gateway: DataGateway, context: Optional[AuthContext], filter_ids: Iterable[str]):
    """
    Load the caller's filters among ``filter_ids``. Ids that do not exist or
    belong to someone else are ignored.
    """
    filter_ids = set(filter_ids or [])
    if not filter_ids or context is None:
        return []
    return [f for f in gateway.list_filters(context.user_id) if f.id in filter_ids]

def list_tenders(
    gateway: DataGateway,
    status: schemas.TenderStatus = schemas.TenderStatus.ACTIVE,
    filter_ids: Optional[List[str]] = None,
    match: Optional[str] = None,
    sort_field: schemas.SortField = schemas.SortField.DEADLINE,
    sort_direction: schemas.SortDirection = schemas.SortDirection.ASC,
    context: Optional[AuthContext] = None,
    now: Optional[datetime] = None,
) -> Result[schemas.TenderListResponse]:
    """
    List tenders for the main listing.

    Free-text search narrows the fetched collection first; the status
    partition, the selected custom filters and the sort are then applied to
    the narrowed set.

    Args:
        gateway: Data gateway bound to the request session
        status: Which bucket to show (active or expired)
        filter_ids: Ids of the caller's custom filters to apply
        match: Case-insensitive substring matched against title or entity
        sort_field: Field to sort by
        sort_direction: Sort direction
        context: Authenticated caller, if any
        now: Reference time, defaults to the current wall-clock time

    Returns:
        Result wrapping a TenderListResponse
    """
    now = now or dates.now()
    try:
        fetched = gateway.search_tenders(match=match, order_by="publish_date", ascending=False)
        custom_filters = _selected_filters(gateway, context, filter_ids)
        favorites = _favorites_for(gateway, context)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching tenders: {str(e)}")
        return Result.failure("Erro ao buscar concursos.")

    logger.info(f"Fetched {len(fetched)} tenders (match={match!r}), applying {len(custom_filters)} filters")

    tenders = pipeline.run(
        fetched,
        status=status,
        custom_filters=custom_filters,
        sort_field=sort_field,
        sort_direction=sort_direction,
        today=dates.today(now),
    )

    return Result.success(schemas.TenderListResponse(
        items=[to_card(tender, favorites, now) for tender in tenders],
        total=len(tenders),
        status=status,
        sort_field=sort_field,
        sort_direction=sort_direction,
    ))

def get_tender(gateway: DataGateway, tender_id: str, context: Optional[AuthContext] = None,
               now: Optional[datetime] = None) -> Result[schemas.TenderCard]:
    """
    Get a single tender by id.
    """
    try:
        tender = gateway.get_tender(tender_id)
        favorites = _favorites_for(gateway, context)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching tender {tender_id}: {str(e)}")
        return Result.failure("Erro ao buscar concurso.")

    if tender is None:
        return Result.failure(f"Tender {tender_id} not found", FailureKind.NOT_FOUND)

    return Result.success(to_card(tender, favorites, now))

def list_entity_tenders(
    gateway: DataGateway,
    tax_id: str,
    status: schemas.TenderStatus = schemas.TenderStatus.ACTIVE,
    context: Optional[AuthContext] = None,
    now: Optional[datetime] = None,
) -> Result[schemas.EntityTendersResponse]:
    """
    Tenders issued by one entity, newest publication first, in one status bucket.
    """
    now = now or dates.now()
    try:
        entity = gateway.get_entity(tax_id)
        fetched = gateway.get_tenders_by_tax_id(tax_id, order_by="publish_date", ascending=False)
        favorites = _favorites_for(gateway, context)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching tenders for entity {tax_id}: {str(e)}")
        return Result.failure("Erro ao buscar concursos da entidade.")

    if entity is None and not fetched:
        return Result.failure(f"Entity {tax_id} not found", FailureKind.NOT_FOUND)

    tenders = pipeline.partition(fetched, status, dates.today(now))
    return Result.success(schemas.EntityTendersResponse(
        tax_id=tax_id,
        name=entity.name if entity else (fetched[0].entity if fetched else None),
        items=[to_card(tender, favorites, now) for tender in tenders],
        total=len(tenders),
        status=status,
    ))
