from fastapi import APIRouter, Depends, Path
from typing import List, Optional
from app.core.gateway import DataGateway, get_gateway
from app.core.utils.http import unwrap
from app.modules.auth.services import AuthContext, get_auth_context, get_optional_auth_context
from app.modules.entities import schemas, services
import logging

router = APIRouter(tags=["entities"])

logger = logging.getLogger(__name__)

@router.get("/", response_model=List[schemas.Entity])
def get_entities(gateway: DataGateway = Depends(get_gateway)):
    """Get all known entities, by name"""
    return unwrap(services.list_entities(gateway))

@router.get("/followed", response_model=List[schemas.FollowedEntity])
def get_followed_entities(
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Get the entities followed by the current user with their active tender counts"""
    return unwrap(services.list_followed(gateway, context.user_id))

@router.post("/followed/{tax_id}", response_model=schemas.FollowResponse)
def follow_entity(
    tax_id: str = Path(..., description="Tax id (NIPC) of a known entity"),
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Follow a known entity"""
    return unwrap(services.follow_entity(gateway, context.user_id, tax_id))

@router.delete("/followed/{tax_id}", response_model=List[str])
def unfollow_entity(
    tax_id: str = Path(..., description="Tax id (NIPC) of the entity to stop following"),
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Stop following an entity. Returns the remaining followed tax ids"""
    return unwrap(services.unfollow_entity(gateway, context.user_id, tax_id))

@router.post("/register", response_model=schemas.FollowResponse)
def register_entity(
    request_data: schemas.RegisterEntityRequest,
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Validate a tax id with VIES, add the entity if it is new and follow it"""
    return unwrap(services.register_by_tax_id(gateway, context.user_id, request_data.tax_id))

@router.get("/{tax_id}", response_model=schemas.EntityDetail)
def get_entity(
    tax_id: str = Path(..., description="Tax id (NIPC) of the entity"),
    context: Optional[AuthContext] = Depends(get_optional_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Get one entity, whether the caller follows it and its active tender count"""
    return unwrap(services.get_entity(gateway, tax_id, context.user_id if context else None))
