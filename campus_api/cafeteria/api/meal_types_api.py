# campus_api/cafeteria/api/meal_types_api.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Connection

from campus_api.auth_student.dependencies import get_current_student
from campus_api.auth_student.token_service import StudentPrincipal
from campus_api.cafeteria.dtos import MealTypeDTO, MealTypeListResponse
from campus_api.cafeteria.repository.meal_type_repo import MealTypeRepository
from campus_api.common.errors import (
    CampusDomainError,
    domain_error_to_http,
    unexpected_error_to_http,
)
from campus_api.db.core import get_connection

router = APIRouter(prefix="/cafeteria-meal-types", tags=["cafeteria-meal-types"])


@router.get("", response_model=MealTypeListResponse)
def list_meal_types(
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    try:
        rows = MealTypeRepository(conn).list_meal_types()
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="MealTypes")

    return MealTypeListResponse(count=len(rows), data=[MealTypeDTO(**r) for r in rows])
