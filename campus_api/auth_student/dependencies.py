# campus_api/auth_student/dependencies.py
from __future__ import annotations

from fastapi import Request

from campus_api.auth_student.token_service import SessionTokenService, StudentPrincipal
from campus_api.common.errors import UnauthenticatedError, domain_error_to_http
from campus_api.config import get_settings


def get_current_student(request: Request) -> StudentPrincipal:
    """
    Resolve the principal from the session cookie.

    Runs as a dependency, so an unauthenticated request is answered with 401
    before any repository is touched.
    """
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise domain_error_to_http(
            UnauthenticatedError("Authentication required. Please login.")
        )

    try:
        return SessionTokenService(settings).verify(token)
    except UnauthenticatedError as e:
        raise domain_error_to_http(e)
