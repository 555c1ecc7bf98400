# campus_api/sports/services/sports_reservation_service.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy.engine import Connection

from campus_api.common.errors import InvalidIntervalError, ValidationError
from campus_api.common.time_utils import to_utc
from campus_api.reservations.services.reservation_status_service import (
    ReservationStatusService,
)
from campus_api.sports.repository.sports_reservation_repo import SportsReservationRepository


class SportsReservationService:
    """
    Facility bookings of the authenticated student.

    - create: absolute start/end, start < end, inserted as confirmed
    - list: latest start first, enriched with facility data
    - cancel: delegated to ReservationStatusService
    """

    def __init__(self, conn: Connection) -> None:
        self.repo = SportsReservationRepository(conn)
        self.status_service = ReservationStatusService(self.repo)

    def create(
        self,
        student_id: str,
        facility_id: int,
        start: datetime,
        end: datetime,
    ) -> Dict[str, Any]:
        for field, value in (("reservation_start_time", start), ("reservation_end_time", end)):
            if value.tzinfo is None:
                raise ValidationError(f"{field} must include a UTC offset.", field=field)

        start_utc = to_utc(start)
        end_utc = to_utc(end)
        if start_utc >= end_utc:
            raise InvalidIntervalError(
                "reservation_end_time must be after reservation_start_time.",
                field="reservation_end_time",
            )

        return self.repo.insert(
            student_id,
            {
                "facility_id": facility_id,
                "reservation_start_time": start_utc,
                "reservation_end_time": end_utc,
            },
        )

    def list_for_student(self, student_id: str) -> List[Dict[str, Any]]:
        return self.repo.list_for_owner(student_id)

    def cancel(self, reservation_id: int, student_id: str) -> Dict[str, Any]:
        return self.status_service.cancel(reservation_id, student_id)
