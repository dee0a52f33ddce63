from fastapi import APIRouter, Depends, HTTPException, Path, Query
from fastapi import status as http_status
from typing import Optional, List
from app.core.gateway import DataGateway, get_gateway
from app.core.utils.http import unwrap
from app.modules.auth.services import AuthContext, get_optional_auth_context
from app.modules.tenders import schemas, services
import logging

router = APIRouter(tags=["tenders"])

# Configure logging
logger = logging.getLogger(__name__)

@router.get("/", response_model=schemas.TenderListResponse)
def get_tenders(
    status: schemas.TenderStatus = Query(schemas.TenderStatus.ACTIVE, description="Active or expired tenders"),
    filter_ids: Optional[List[str]] = Query(None, description="Ids of the caller's custom filters to apply"),
    match: Optional[str] = Query(None, description="Search query matched against title or entity"),
    sort_field: schemas.SortField = Query(schemas.SortField.DEADLINE, description="Field to sort by"),
    sort_direction: schemas.SortDirection = Query(schemas.SortDirection.ASC, description="Sort direction (asc/desc)"),
    gateway: DataGateway = Depends(get_gateway),
    context: Optional[AuthContext] = Depends(get_optional_auth_context),
):
    """
    Get the tender listing.

    Query parameters:
    - **status**: `active` (deadline today or later) or `expired`
    - **filter_ids**: custom filters to apply; a tender passes if it matches any of them
    - **match**: free-text search, narrows the collection before the other steps
    - **sort_field**: `deadline`, `publish_date` or `procedure_number`
    - **sort_direction**: `asc` or `desc`

    Tenders without a proposal deadline are never listed. Custom filters need
    an authenticated caller.
    """
    if filter_ids and context is None:
        raise HTTPException(
            status_code=http_status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to apply custom filters",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return unwrap(services.list_tenders(
        gateway,
        status=status,
        filter_ids=filter_ids,
        match=match,
        sort_field=sort_field,
        sort_direction=sort_direction,
        context=context,
    ))

@router.get("/entity/{tax_id}", response_model=schemas.EntityTendersResponse)
def get_entity_tenders(
    tax_id: str = Path(..., description="Tax id (NIPC) of the issuing entity"),
    status: schemas.TenderStatus = Query(schemas.TenderStatus.ACTIVE, description="Active or expired tenders"),
    gateway: DataGateway = Depends(get_gateway),
    context: Optional[AuthContext] = Depends(get_optional_auth_context),
):
    """Get the tenders issued by one entity"""
    return unwrap(services.list_entity_tenders(gateway, tax_id, status=status, context=context))

@router.get("/{tender_id}", response_model=schemas.TenderCard)
def get_tender(
    tender_id: str = Path(..., description="Identifier of the tender"),
    gateway: DataGateway = Depends(get_gateway),
    context: Optional[AuthContext] = Depends(get_optional_auth_context),
):
    """Get a single tender"""
    return unwrap(services.get_tender(gateway, tender_id, context=context))
