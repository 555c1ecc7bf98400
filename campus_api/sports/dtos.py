from datetime import datetime, time
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, Field, field_serializer

from campus_api.common.ids import RowId
from campus_api.common.time_utils import utc_isoformat

# ============================================================
# Sports Reservation DTO
# ============================================================


class SportsReservationCreateDTO(BaseModel):
    facility_id: RowId
    # ISO 8601 with offset, e.g. "2025-05-14T09:00:00+00:00"
    reservation_start_time: AwareDatetime
    reservation_end_time: AwareDatetime


class SportsReservationDTO(BaseModel):
    id: int
    student_id: str
    facility_id: int
    reservation_start_time: datetime
    reservation_end_time: datetime
    status: str

    @field_serializer("reservation_start_time", "reservation_end_time")
    def serialize_utc(self, value: datetime) -> str:
        return utc_isoformat(value)


class SportsReservationListItemDTO(SportsReservationDTO):
    facility_name: str
    location_details: Optional[str] = None
    facility_type_name: str


class SportsReservationResponse(BaseModel):
    success: bool = True
    message: str
    data: SportsReservationDTO


class SportsReservationListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[SportsReservationListItemDTO]


# ============================================================
# Facilities / availability
# ============================================================


class SportsFacilityDTO(BaseModel):
    facility_id: int
    facility_name: str
    facility_status: str
    location_details: Optional[str] = None
    type_id: int
    type_name: str
    opening_time: time
    closing_time: time
    slot_duration_minutes: int


class SportsFacilityListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[SportsFacilityDTO]


class TimeSlotDTO(BaseModel):
    start_time: str = Field(..., description="UTC, ISO 8601")
    end_time: str = Field(..., description="UTC, ISO 8601")


class FacilityAvailabilityDTO(BaseModel):
    facility_id: int
    date: str
    available_slots: List[TimeSlotDTO]


class FacilityAvailabilityResponse(BaseModel):
    success: bool = True
    data: FacilityAvailabilityDTO
