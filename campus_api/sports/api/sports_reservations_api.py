# campus_api/sports/api/sports_reservations_api.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.engine import Connection

from campus_api.auth_student.dependencies import get_current_student
from campus_api.auth_student.token_service import StudentPrincipal
from campus_api.common.errors import (
    CampusDomainError,
    domain_error_to_http,
    unexpected_error_to_http,
)
from campus_api.common.ids import MAX_ID
from campus_api.db.core import get_connection
from campus_api.sports.dtos import (
    SportsReservationCreateDTO,
    SportsReservationDTO,
    SportsReservationListItemDTO,
    SportsReservationListResponse,
    SportsReservationResponse,
)
from campus_api.sports.services.sports_reservation_service import SportsReservationService

router = APIRouter(prefix="/sports-reservations", tags=["sports-reservations"])


@router.post(
    "",
    response_model=SportsReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_sports_reservation(
    body: SportsReservationCreateDTO,
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = SportsReservationService(conn)
    try:
        row = service.create(
            student.student_id,
            body.facility_id,
            body.reservation_start_time,
            body.reservation_end_time,
        )
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="SportsReservation")

    return SportsReservationResponse(
        message="Sports reservation created successfully.",
        data=SportsReservationDTO(**row),
    )


@router.get("", response_model=SportsReservationListResponse)
def list_sports_reservations(
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = SportsReservationService(conn)
    try:
        rows = service.list_for_student(student.student_id)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="SportsReservation")

    return SportsReservationListResponse(
        count=len(rows),
        data=[SportsReservationListItemDTO(**r) for r in rows],
    )


@router.patch("/{reservation_id}", response_model=SportsReservationResponse)
def cancel_sports_reservation(
    reservation_id: int = Path(..., ge=1, le=MAX_ID),
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = SportsReservationService(conn)
    try:
        row = service.cancel(reservation_id, student.student_id)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="SportsReservation")

    return SportsReservationResponse(
        message="Sports reservation cancelled successfully.",
        data=SportsReservationDTO(**row),
    )
