from fastapi import APIRouter, Depends, Path
from app.core.gateway import DataGateway, get_gateway
from app.core.utils import dates
from app.core.utils.http import unwrap
from app.modules.auth.services import AuthContext, get_auth_context
from app.modules.favorites import schemas, services
from app.modules.tenders import pipeline
from app.modules.tenders.services import to_card
import logging

router = APIRouter(tags=["favorites"])

logger = logging.getLogger(__name__)

@router.get("/", response_model=schemas.FavoritesResponse)
def get_favorites(
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Get the ids of the tenders favorited by the current user"""
    favorites = unwrap(services.list_favorites(gateway, context.user_id))
    return schemas.FavoritesResponse(favorites=sorted(favorites))

@router.post("/{tender_id}/toggle", response_model=schemas.ToggleFavoriteResponse)
def toggle_favorite(
    tender_id: str = Path(..., description="Identifier of the tender to favorite or unfavorite"),
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Favorite a tender, or remove it from favorites if it already is one"""
    favorites = unwrap(services.toggle_favorite(gateway, context.user_id, tender_id))
    return schemas.ToggleFavoriteResponse(
        tender_id=tender_id,
        is_favorite=tender_id in favorites,
        favorites=sorted(favorites)
    )

@router.get("/tenders", response_model=schemas.FavoriteTendersResponse)
def get_favorite_tenders(
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Get the favorited tenders, newest publication first"""
    tenders = unwrap(services.list_favorite_tenders(gateway, context.user_id))
    now = dates.now()
    favorites = {tender.id for tender in tenders}
    return schemas.FavoriteTendersResponse(
        items=[to_card(tender, favorites, now) for tender in tenders],
        total=len(tenders),
        active_count=pipeline.count_active(tenders, dates.today(now))
    )

@router.get("/active-count", response_model=schemas.ActiveCountResponse)
def get_active_count(
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Number of favorited tenders still open for proposals"""
    return schemas.ActiveCountResponse(active_count=unwrap(services.active_favorites_count(gateway, context.user_id)))
