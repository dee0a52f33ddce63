import logging
from typing import List, Optional, Set
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from app.core.gateway import DataGateway
from app.core.result import Result
from app.core.utils import dates
from app.modules.tenders import pipeline

# Configure logging
logger = logging.getLogger(__name__)

def _stored_favorites(gateway: DataGateway, user_id: str) -> List[str]:
    # A missing settings row means the user has not favorited anything yet
    row = gateway.get_user_settings(user_id)
    if row is None or not row.favorites:
        return []
    return list(row.favorites)

def list_favorites(gateway: DataGateway, user_id: str) -> Result[Set[str]]:
    """
    Get the ids of the tenders a user has favorited.

    Args:
        gateway: Data gateway bound to the request session
        user_id: The ID of the user

    Returns:
        Result wrapping the set of tender ids, empty when the user has no settings row
    """
    try:
        return Result.success(set(_stored_favorites(gateway, user_id)))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching favorites for user {user_id}: {str(e)}")
        return Result.failure("Erro ao buscar favoritos.")

def toggle_favorite(gateway: DataGateway, user_id: str, tender_id: str) -> Result[Set[str]]:
    """
    Add the tender to the user's favorites, or remove it if already there.

    The whole favorites list is read, changed and written back. Two toggles
    racing for the same user can lose one update (last write wins).

    Args:
        gateway: Data gateway bound to the request session
        user_id: The ID of the user
        tender_id: The tender to toggle

    Returns:
        Result wrapping the updated set of tender ids
    """
    logger.debug(f"Toggling favorite {tender_id} for user {user_id}")

    try:
        current = _stored_favorites(gateway, user_id)
        if tender_id in current:
            updated = [favorite for favorite in current if favorite != tender_id]
            logger.info(f"Removing tender {tender_id} from favorites of user {user_id}")
        else:
            updated = current + [tender_id]
            logger.info(f"Adding tender {tender_id} to favorites of user {user_id}")

        gateway.upsert_user_settings(user_id, favorites=updated)
    except SQLAlchemyError as e:
        logger.error(f"Error updating favorites for user {user_id}: {str(e)}")
        return Result.failure("Erro ao atualizar favoritos. Tente novamente.")

    return Result.success(set(updated))

def list_favorite_tenders(gateway: DataGateway, user_id: str, order_by: str = "publish_date",
                          ascending: bool = False) -> Result[list]:
    """
    Get the favorited tender rows, newest publication first by default.
    """
    try:
        favorites = _stored_favorites(gateway, user_id)
        return Result.success(gateway.get_tenders_by_ids(favorites, order_by=order_by, ascending=ascending))
    except SQLAlchemyError as e:
        logger.error(f"Error fetching favorited tenders for user {user_id}: {str(e)}")
        return Result.failure("Erro ao buscar concursos favoritados.")

def active_favorites_count(gateway: DataGateway, user_id: str, now: Optional[datetime] = None) -> Result[int]:
    """
    Number of favorited tenders whose deadline has not passed, shown as a badge.
    """
    result = list_favorite_tenders(gateway, user_id)
    if not result.ok:
        return result
    return Result.success(pipeline.count_active(result.value, dates.today(now)))
