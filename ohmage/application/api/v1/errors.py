"""Centralized error transformation for API routes.

Maps ohmage errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from ohmage.domain.shared.error import (
    AuthorizationError,
    DomainError,
    InfrastructureError,
    InvalidInputError,
    NotFoundError,
    OhmageError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    InvalidInputError: 400,
    NotFoundError: 404,
    AuthorizationError: 403,
}


def map_ohmage_error(error: OhmageError) -> HTTPException:
    """Map an ohmage error to an HTTPException.

    Args:
        error: The ohmage error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Infrastructure errors → 503 Service Unavailable
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, InvalidInputError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown OhmageError subclasses
    return HTTPException(status_code=500, detail=detail)
