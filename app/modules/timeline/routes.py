from fastapi import APIRouter, Depends, Query
from typing import Optional
from app.core.gateway import DataGateway, get_gateway
from app.core.utils.http import unwrap
from app.modules.auth.services import AuthContext, get_auth_context
from app.modules.timeline import schemas, services

router = APIRouter(tags=["calendar"])

@router.get("/", response_model=schemas.CalendarResponse)
def get_calendar(
    month: Optional[int] = Query(None, ge=1, le=12, description="Month to display (1-12), defaults to the current month"),
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Year to display, defaults to the current year"),
    include_expired: bool = Query(False, description="Also show tenders whose deadline has passed"),
    selected: Optional[str] = Query(None, description="Tender whose details are expanded"),
    context: AuthContext = Depends(get_auth_context),
    gateway: DataGateway = Depends(get_gateway)
):
    """
    Timeline of the current user's favorited tenders for one month.

    Each bar spans from the tender's publication day to its deadline day,
    clipped to the month, with `left` and `width` given as fractions of the
    month width.
    """
    return unwrap(services.build_calendar(
        gateway,
        context.user_id,
        month=month,
        year=year,
        include_expired=include_expired,
        selected_id=selected
    ))
