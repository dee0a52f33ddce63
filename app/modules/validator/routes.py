from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
from typing import Optional
from app.core.result import FailureKind
from app.modules.validator import services

router = APIRouter(tags=["validator"])

@router.get("")
def validate_tax_id(
    tax_id: Optional[str] = Query(None, alias="taxId", description="Tax identifier (NIPC) to validate")
):
    """
    Proxy a tax id lookup to the EU VIES service.

    The upstream JSON body is relayed unchanged on success. A missing tax id
    answers 400 without contacting the upstream service; any upstream failure
    answers 500 with a generic message.
    """
    result = services.lookup_tax_id(tax_id or "")
    if result.ok:
        return JSONResponse(content=result.value)

    status_code = (
        status.HTTP_400_BAD_REQUEST if result.kind == FailureKind.INVALID
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(status_code=status_code, content={"error": result.error})
