from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional
from app.core.gateway import DataGateway, get_gateway
from app.core.utils.http import unwrap
from app.modules.auth.services import AuthContext, get_auth_context
from app.modules.filters import schemas, services
import logging

router = APIRouter(tags=["filters"])

logger = logging.getLogger(__name__)

@router.get("/", response_model=List[schemas.CustomFilter])
def get_filters(
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Get the current user's custom filters, newest first"""
    return unwrap(services.list_filters(gateway, context.user_id))

@router.post("/", response_model=schemas.CustomFilter, status_code=status.HTTP_201_CREATED)
def create_filter(
    filter_data: schemas.CustomFilterCreate,
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Create a custom filter. Only the name is required"""
    return unwrap(services.create_filter(gateway, context.user_id, filter_data))

@router.put("/{filter_id}", response_model=schemas.CustomFilter)
def update_filter(
    filter_data: schemas.CustomFilterUpdate,
    filter_id: str = Path(..., description="Identifier of the filter to update"),
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Update a custom filter in place"""
    return unwrap(services.update_filter(gateway, context.user_id, filter_id, filter_data))

@router.delete("/{filter_id}", status_code=status.HTTP_204_NO_CONTENT, response_model=None)
def delete_filter(
    filter_id: str = Path(..., description="Identifier of the filter to delete"),
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """Delete a custom filter"""
    unwrap(services.delete_filter(gateway, context.user_id, filter_id))
    return None

@router.get("/districts", response_model=schemas.DistrictsResponse)
def get_districts(gateway: DataGateway = Depends(get_gateway)):
    """Districts available for the filter form"""
    return schemas.DistrictsResponse(districts=unwrap(services.list_districts(gateway)))

@router.get("/municipalities", response_model=schemas.MunicipalitiesResponse)
def get_municipalities(
    district: Optional[str] = Query(None, description="Restrict to one district"),
    gateway: DataGateway = Depends(get_gateway)
):
    """Municipalities available for the filter form"""
    return schemas.MunicipalitiesResponse(
        district=district,
        municipalities=unwrap(services.list_municipalities(gateway, district))
    )
