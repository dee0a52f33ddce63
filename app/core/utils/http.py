from fastapi import HTTPException, status
from app.core.result import Result, FailureKind

STATUS_BY_KIND = {
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.INVALID: status.HTTP_400_BAD_REQUEST,
    FailureKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    FailureKind.CONFLICT: status.HTTP_409_CONFLICT,
    FailureKind.FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

def unwrap(result: Result):
    """
    Return the value of a successful result or raise the matching HTTPException.
    """
    if result.ok:
        return result.value
    raise HTTPException(
        status_code=STATUS_BY_KIND.get(result.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=result.error
    )
