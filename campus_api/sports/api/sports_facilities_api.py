# campus_api/sports/api/sports_facilities_api.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.engine import Connection

from campus_api.auth_student.dependencies import get_current_student
from campus_api.auth_student.token_service import StudentPrincipal
from campus_api.common.errors import (
    CampusDomainError,
    domain_error_to_http,
    unexpected_error_to_http,
)
from campus_api.common.ids import MAX_ID
from campus_api.common.time_utils import utc_isoformat
from campus_api.db.core import get_connection
from campus_api.sports.dtos import (
    FacilityAvailabilityDTO,
    FacilityAvailabilityResponse,
    SportsFacilityDTO,
    SportsFacilityListResponse,
    TimeSlotDTO,
)
from campus_api.sports.repository.facility_repo import FacilityRepository
from campus_api.sports.services.facility_availability_service import (
    FacilityAvailabilityService,
)

router = APIRouter(prefix="/sports-facilities", tags=["sports-facilities"])


# ============================================================
# GET /sports-facilities
# ============================================================
@router.get("", response_model=SportsFacilityListResponse)
def list_sports_facilities(
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    try:
        rows = FacilityRepository(conn).list_available_facilities()
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="SportsFacilities")

    return SportsFacilityListResponse(
        count=len(rows),
        data=[SportsFacilityDTO(**r) for r in rows],
    )


# ============================================================
# GET /sports-facilities/{facility_id}/availability?date=YYYY-MM-DD
# ============================================================
@router.get("/{facility_id}/availability", response_model=FacilityAvailabilityResponse)
def get_facility_availability(
    facility_id: int = Path(..., ge=1, le=MAX_ID),
    date: str = Query(..., description="YYYY-MM-DD"),
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    service = FacilityAvailabilityService(conn)
    try:
        result = service.get_availability(facility_id, date)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="FacilityAvailability")

    return FacilityAvailabilityResponse(
        data=FacilityAvailabilityDTO(
            facility_id=result.facility_id,
            date=result.date.isoformat(),
            available_slots=[
                TimeSlotDTO(start_time=utc_isoformat(s.start), end_time=utc_isoformat(s.end))
                for s in result.slots
            ],
        )
    )
