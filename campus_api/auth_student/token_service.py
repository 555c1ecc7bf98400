# campus_api/auth_student/token_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from campus_api.common.errors import UnauthenticatedError
from campus_api.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class StudentPrincipal:
    """
    Identity a request runs as.

    - student_id: students.id (UUID string), the ownership key of reservations
    - email / student_id_no: informational only
    """
    student_id: str
    email: Optional[str] = None
    student_id_no: Optional[str] = None


class SessionTokenService:
    """Signs and verifies the session JWT carried in the auth cookie."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def issue(self, principal: StudentPrincipal) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "studentId": principal.student_id,
            "email": principal.email,
            "studentIdNo": principal.student_id_no,
            "iat": now,
            "exp": now + timedelta(seconds=self.settings.session_max_age_seconds),
        }
        return jwt.encode(
            payload,
            self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
        )

    def verify(self, token: str) -> StudentPrincipal:
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise UnauthenticatedError("Session expired. Please login again.")
        except jwt.InvalidTokenError as e:
            logger.info("[Session] rejected token: %s", e)
            raise UnauthenticatedError("Invalid session. Please login again.")

        student_id = payload.get("studentId")
        if not student_id:
            raise UnauthenticatedError("Invalid token: Student ID missing.")

        return StudentPrincipal(
            student_id=str(student_id),
            email=payload.get("email"),
            student_id_no=payload.get("studentIdNo"),
        )
