"""
Mapping from domain errors to HTTP errors.
"""

from fastapi import HTTPException

from domain.errors import DomainError, ErrorCode

_STATUS_BY_CODE = {
    ErrorCode.PACKAGE_NOT_FOUND: 404,
    ErrorCode.VARIANT_NOT_FOUND: 404,
    ErrorCode.INVALID_ARGUMENT: 422,
}


def http_error_for(error: DomainError) -> HTTPException:
    """Build the HTTPException reported to API clients for a domain error."""
    return HTTPException(
        status_code=_STATUS_BY_CODE.get(error.code, 400),
        detail={"error": error.code.value, "message": error.message},
    )
