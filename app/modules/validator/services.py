import logging
from typing import Any, Dict
import requests
from app.core.config import settings
from app.core.result import Result, FailureKind

# Configure logging
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Erro ao consultar o NIPC. Verifique se o número está correto e tente novamente."

def build_vies_url(tax_id: str) -> str:
    return f"{settings.VIES_BASE_URL.rstrip('/')}/ms/{settings.VIES_COUNTRY_CODE}/vat/{tax_id.strip()}"

def lookup_tax_id(tax_id: str) -> Result[Dict[str, Any]]:
    """
    Look a tax id up in the EU VIES VAT validation service.

    Exactly one GET is sent per call. There is no retry and no cache, and
    every upstream problem (non-2xx status, transport error, unreadable body)
    is reported with the same generic message.

    Args:
        tax_id: The tax identifier (NIPC) to validate

    Returns:
        Result wrapping the upstream JSON body unchanged
    """
    if not tax_id or not tax_id.strip():
        return Result.failure("taxId is required", FailureKind.INVALID)

    url = build_vies_url(tax_id)
    logger.info(f"Querying VIES for tax id {tax_id.strip()}")

    try:
        response = requests.get(
            url,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.VIES_USER_AGENT
            },
            timeout=settings.VIES_TIMEOUT
        )
        if not 200 <= response.status_code < 300:
            raise requests.HTTPError(f"VIES API error: {response.status_code}", response=response)
        return Result.success(response.json())
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error querying VIES API: {str(e)}")
        return Result.failure(GENERIC_ERROR)
