# campus_api/common/errors.py
"""
Domain error taxonomy shared by every reservation path.

Repositories and services raise these; API modules turn them into
HTTPException via domain_error_to_http() so routes stay thin.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

MSG_INTERNAL = "An unexpected error occurred."
MSG_UNAVAILABLE = "Database connection failed. Please try again later."


class CampusDomainError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL"
    retryable: bool = False

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


# -----------------------------------------------------
# 4xx: caller-actionable
# -----------------------------------------------------
class ValidationError(CampusDomainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class InvalidReferenceError(ValidationError):
    code = "INVALID_REFERENCE"


class InvalidIntervalError(ValidationError):
    code = "INVALID_INTERVAL"


class UnauthenticatedError(CampusDomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"


class ForbiddenError(CampusDomainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class NotFoundError(CampusDomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(CampusDomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class DuplicateBookingError(ConflictError):
    code = "DUPLICATE_BOOKING"


# -----------------------------------------------------
# 5xx: logged server-side, generic to the caller
# -----------------------------------------------------
class UnavailableError(CampusDomainError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "UNAVAILABLE"
    retryable = True


class InternalError(CampusDomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL"


def error_body(code: str, message: str, *, field: Optional[str] = None, retryable: bool = False) -> dict:
    return {
        "code": code,
        "message": message,
        "field": field,
        "retryable": retryable,
    }


def domain_error_to_http(exc: CampusDomainError) -> HTTPException:
    """
    Map a domain error to an HTTPException.

    5xx kinds never carry internal detail across the boundary; the original
    exception is logged with its traceback instead.
    """
    if isinstance(exc, UnavailableError):
        logger.error("[Storage] unavailable: %s", exc.message, exc_info=exc)
        message = MSG_UNAVAILABLE
    elif exc.status_code >= 500:
        logger.error("[Internal] %s", exc.message, exc_info=exc)
        message = MSG_INTERNAL
    else:
        message = exc.message

    return HTTPException(
        status_code=exc.status_code,
        detail=error_body(exc.code, message, field=exc.field, retryable=exc.retryable),
    )


def unexpected_error_to_http(exc: Exception, *, context: str) -> HTTPException:
    logger.exception("[%s] unexpected failure: %s", context, exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_body(InternalError.code, MSG_INTERNAL),
    )
