"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException, status

from app.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidReferenceError,
    PermissionDeniedError,
    RegistrationError,
)

DOMAIN_ERRORS = (
    EntityNotFoundError,
    DuplicateEntityError,
    InvalidReferenceError,
    PermissionDeniedError,
    RegistrationError,
)

_STATUS_BY_ERROR = {
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    InvalidReferenceError: status.HTTP_400_BAD_REQUEST,
    RegistrationError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
}


def http_error(exc: Exception) -> HTTPException:
    """Map a domain exception onto the matching HTTPException."""
    code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=str(exc))
