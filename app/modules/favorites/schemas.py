from pydantic import BaseModel
from typing import List
from app.modules.tenders.schemas import TenderCard

class FavoritesResponse(BaseModel):
    """Ids of the caller's favorited tenders"""
    favorites: List[str] = []

class ToggleFavoriteResponse(BaseModel):
    tender_id: str
    is_favorite: bool
    favorites: List[str] = []

class FavoriteTendersResponse(BaseModel):
    items: List[TenderCard] = []
    total: int = 0
    active_count: int = 0

class ActiveCountResponse(BaseModel):
    active_count: int = 0
