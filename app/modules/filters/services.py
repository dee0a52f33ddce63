import logging
import uuid
from typing import Iterable, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from app.core.gateway import DataGateway
from app.core.result import Result, FailureKind
from app.modules.filters import schemas
from app.modules.filters.models import CustomFilter as CustomFilterModel

# Configure logging
logger = logging.getLogger(__name__)

# Form value meaning "no district restriction"
ANY_DISTRICT = "Todos"

def _clean_list(values: Optional[Iterable[str]]) -> Optional[List[str]]:
    """Strip, drop blanks and duplicates. An empty result is stored as None."""
    if not values:
        return None
    cleaned = []
    for value in values:
        value = (value or "").strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned or None

def _clean_district(district: Optional[str]) -> Optional[str]:
    district = (district or "").strip()
    if not district or district == ANY_DISTRICT:
        return None
    return district

def _prepare(data: schemas.CustomFilterBase) -> Result[dict]:
    name = (data.name or "").strip()
    if not name:
        return Result.failure("name is required", FailureKind.INVALID)
    return Result.success({
        "name": name,
        "district": _clean_district(data.district),
        "municipalities": _clean_list(data.municipalities),
        "keywords": _clean_list(data.keywords),
    })

def _owned_filter(gateway: DataGateway, user_id: str, filter_id: str) -> Result[CustomFilterModel]:
    custom_filter = gateway.get_filter(filter_id)
    if custom_filter is None:
        return Result.failure(f"Filter {filter_id} not found", FailureKind.NOT_FOUND)
    if custom_filter.user_id != user_id:
        logger.warning(f"User {user_id} tried to access filter {filter_id} owned by {custom_filter.user_id}")
        return Result.failure("Not enough permissions", FailureKind.FORBIDDEN)
    return Result.success(custom_filter)

def list_filters(gateway: DataGateway, user_id: str) -> Result[List[CustomFilterModel]]:
    """
    Get a user's filters, newest first.
    """
    try:
        return Result.success(gateway.list_filters(user_id))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching filters for user {user_id}: {str(e)}")
        return Result.failure("Erro ao buscar filtros.")

def create_filter(gateway: DataGateway, user_id: str, data: schemas.CustomFilterCreate) -> Result[CustomFilterModel]:
    """
    Create a filter for a user.

    Args:
        gateway: Data gateway bound to the request session
        user_id: Owner of the new filter
        data: Name plus optional district, municipalities and keywords

    Returns:
        Result wrapping the stored filter, or an INVALID failure when the name is blank
    """
    prepared = _prepare(data)
    if not prepared.ok:
        return prepared

    custom_filter = CustomFilterModel(id=str(uuid.uuid4()), user_id=user_id, **prepared.value)
    try:
        custom_filter = gateway.insert_filter(custom_filter)
    except SQLAlchemyError as e:
        logger.error(f"Error saving filter for user {user_id}: {str(e)}")
        return Result.failure("Erro ao salvar filtro. Tente novamente.")

    logger.info(f"Created filter {custom_filter.id} for user {user_id}")
    return Result.success(custom_filter)

def update_filter(gateway: DataGateway, user_id: str, filter_id: str,
                  data: schemas.CustomFilterUpdate) -> Result[CustomFilterModel]:
    """
    Replace the conditions of an existing filter, keeping its id.
    """
    prepared = _prepare(data)
    if not prepared.ok:
        return prepared

    try:
        owned = _owned_filter(gateway, user_id, filter_id)
        if not owned.ok:
            return owned
        custom_filter = gateway.update_filter(owned.value, **prepared.value)
    except SQLAlchemyError as e:
        logger.error(f"Error updating filter {filter_id}: {str(e)}")
        return Result.failure("Erro ao salvar filtro. Tente novamente.")

    logger.info(f"Updated filter {filter_id} for user {user_id}")
    return Result.success(custom_filter)

def delete_filter(gateway: DataGateway, user_id: str, filter_id: str) -> Result[str]:
    """
    Delete one of the user's filters.
    """
    try:
        owned = _owned_filter(gateway, user_id, filter_id)
        if not owned.ok:
            return owned
        gateway.delete_filter(owned.value)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting filter {filter_id}: {str(e)}")
        return Result.failure("Erro ao eliminar filtro. Tente novamente.")

    logger.info(f"Deleted filter {filter_id} for user {user_id}")
    return Result.success(filter_id)

def list_districts(gateway: DataGateway) -> Result[List[str]]:
    try:
        return Result.success(gateway.list_districts())
    except SQLAlchemyError as e:
        logger.error(f"Error fetching districts: {str(e)}")
        return Result.failure("Erro ao buscar distritos.")

def list_municipalities(gateway: DataGateway, district: Optional[str] = None) -> Result[List[str]]:
    """
    Municipalities for the filter form, restricted to a district unless it is unset or 'Todos'.
    """
    try:
        return Result.success(gateway.list_municipalities(_clean_district(district)))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching municipalities for district {district}: {str(e)}")
        return Result.failure("Erro ao buscar municípios.")
