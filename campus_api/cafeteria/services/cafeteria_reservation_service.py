# campus_api/cafeteria/services/cafeteria_reservation_service.py
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy.engine import Connection

from campus_api.cafeteria.repository.cafeteria_reservation_repo import (
    CafeteriaReservationRepository,
)
from campus_api.common.time_utils import parse_calendar_date
from campus_api.reservations.services.reservation_status_service import (
    ReservationStatusService,
)


class CafeteriaReservationService:
    """
    Meal reservations of the authenticated student.

    - create: strict date check, then insert (status=active)
    - list: newest date first
    - cancel: delegated to ReservationStatusService
    """

    def __init__(self, conn: Connection) -> None:
        self.repo = CafeteriaReservationRepository(conn)
        self.status_service = ReservationStatusService(self.repo)

    def create(self, student_id: str, reservation_date: str, meal_type_id: int) -> Dict[str, Any]:
        on_date = parse_calendar_date(reservation_date, field="reservation_date")
        return self.repo.insert(
            student_id,
            {"reservation_date": on_date, "meal_type_id": meal_type_id},
        )

    def list_for_student(self, student_id: str) -> List[Dict[str, Any]]:
        return self.repo.list_for_owner(student_id)

    def cancel(self, reservation_id: int, student_id: str) -> Dict[str, Any]:
        return self.status_service.cancel(reservation_id, student_id)
