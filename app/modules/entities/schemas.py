from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class Entity(BaseModel):
    tax_id: str
    name: str

    model_config = ConfigDict(from_attributes=True)

class EntityDetail(Entity):
    is_followed: bool = False
    active_count: int = 0

class FollowedEntity(BaseModel):
    """An entity the user follows, with its tenders still open for proposals"""
    tax_id: str
    name: str
    active_count: int = 0

class FollowResponse(BaseModel):
    tax_id: str
    name: Optional[str] = None
    already_following: bool = False
    followed_entities: List[str] = []
    message: str

class RegisterEntityRequest(BaseModel):
    tax_id: str = Field(..., description="Tax identifier (NIPC) to validate and follow")
