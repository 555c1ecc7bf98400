# campus_api/cafeteria/api/cafeteria_reservations_api.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.engine import Connection

from campus_api.auth_student.dependencies import get_current_student
from campus_api.auth_student.token_service import StudentPrincipal
from campus_api.cafeteria.dtos import (
    CafeteriaReservationCreateDTO,
    CafeteriaReservationDTO,
    CafeteriaReservationListItemDTO,
    CafeteriaReservationListResponse,
    CafeteriaReservationResponse,
)
from campus_api.cafeteria.services.cafeteria_reservation_service import (
    CafeteriaReservationService,
)
from campus_api.common.errors import (
    CampusDomainError,
    domain_error_to_http,
    unexpected_error_to_http,
)
from campus_api.common.ids import MAX_ID
from campus_api.db.core import get_connection

router = APIRouter(prefix="/cafeteria-reservations", tags=["cafeteria-reservations"])


# ============================================================
# POST /cafeteria-reservations
# ============================================================
@router.post(
    "",
    response_model=CafeteriaReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_cafeteria_reservation(
    body: CafeteriaReservationCreateDTO,
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = CafeteriaReservationService(conn)
    try:
        row = service.create(student.student_id, body.reservation_date, body.meal_type_id)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="CafeteriaReservation")

    return CafeteriaReservationResponse(
        message="Reservation created successfully.",
        data=CafeteriaReservationDTO(**row),
    )


# ============================================================
# GET /cafeteria-reservations
# ============================================================
@router.get("", response_model=CafeteriaReservationListResponse)
def list_cafeteria_reservations(
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = CafeteriaReservationService(conn)
    try:
        rows = service.list_for_student(student.student_id)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="CafeteriaReservation")

    return CafeteriaReservationListResponse(
        count=len(rows),
        data=[CafeteriaReservationListItemDTO(**r) for r in rows],
    )


# ============================================================
# PATCH /cafeteria-reservations/{reservation_id}  (cancel)
# ============================================================
@router.patch("/{reservation_id}", response_model=CafeteriaReservationResponse)
def cancel_cafeteria_reservation(
    reservation_id: int = Path(..., ge=1, le=MAX_ID),
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = CafeteriaReservationService(conn)
    try:
        row = service.cancel(reservation_id, student.student_id)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="CafeteriaReservation")

    return CafeteriaReservationResponse(
        message="Reservation cancelled successfully.",
        data=CafeteriaReservationDTO(**row),
    )
