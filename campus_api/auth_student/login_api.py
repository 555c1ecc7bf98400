# campus_api/auth_student/login_api.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.engine import Connection

from campus_api.auth_student.password import verify_password
from campus_api.auth_student.student_repo import StudentRepository
from campus_api.auth_student.token_service import SessionTokenService, StudentPrincipal
from campus_api.common.errors import (
    CampusDomainError,
    UnauthenticatedError,
    ValidationError,
    domain_error_to_http,
    unexpected_error_to_http,
)
from campus_api.config import get_settings
from campus_api.db.core import get_connection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth-student"])


class LoginRequest(BaseModel):
    mail: Optional[str] = None
    password: Optional[str] = None


class LoginStudentDTO(BaseModel):
    student_id: str
    email: str
    student_id_no: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    data: LoginStudentDTO


class LogoutResponse(BaseModel):
    success: bool = True
    message: str


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    response: Response,
    conn: Connection = Depends(get_connection),
):
    settings = get_settings()
    try:
        if not req.mail or not req.password:
            raise ValidationError("Email and password are required")

        student = StudentRepository(conn).find_by_email(req.mail)
        if student is None or not verify_password(req.password, student["password_hash"]):
            logger.info("[Login] failed for email=%s", req.mail)
            raise UnauthenticatedError("Invalid credentials")

        principal = StudentPrincipal(
            student_id=str(student["id"]),
            email=student["email"],
            student_id_no=str(student["student_id_no"]),
        )
        token = SessionTokenService(settings).issue(principal)

    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="Login")

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.session_max_age_seconds,
        path="/",
    )
    logger.info("[Login] student=%s", principal.student_id)

    return LoginResponse(
        message="Login successful",
        data=LoginStudentDTO(
            student_id=principal.student_id,
            email=principal.email,
            student_id_no=principal.student_id_no,
        ),
    )


@router.post("/logout", response_model=LogoutResponse)
def logout(response: Response):
    settings = get_settings()
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return LogoutResponse(message="Logged out")
