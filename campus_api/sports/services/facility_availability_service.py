# campus_api/sports/services/facility_availability_service.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import List, Optional

from sqlalchemy.engine import Connection

from campus_api.availability.slot_calculator import TimeSlot, available_slots, day_bounds
from campus_api.common.errors import NotFoundError
from campus_api.common.time_utils import parse_calendar_date, resolve_zone
from campus_api.config import get_settings
from campus_api.sports.repository.facility_repo import FacilityRepository


@dataclass
class FacilityAvailability:
    facility_id: int
    date: date
    slots: List[TimeSlot]


class FacilityAvailabilityService:
    """
    Read path for a facility's free slots on one date.

    Loads the operating rule and the live bookings of that (facility-local)
    day, then hands both to the pure slot calculator.
    """

    def __init__(self, conn: Connection, tz: Optional[tzinfo] = None) -> None:
        self.repo = FacilityRepository(conn)
        self.tz = tz or resolve_zone(get_settings().facility_timezone)

    def get_availability(self, facility_id: int, date_str: str) -> FacilityAvailability:
        on_date = parse_calendar_date(date_str, field="date")

        rules = self.repo.get_facility_rules(facility_id)
        if rules is None:
            raise NotFoundError("Facility not found.", field="facility_id")

        window_start, window_end = day_bounds(on_date, self.tz)
        booked = self.repo.list_booked_start_times(
            facility_id,
            window_start=window_start,
            window_end=window_end,
        )

        slots = available_slots(
            rules["opening_time"],
            rules["closing_time"],
            rules["slot_duration_minutes"],
            on_date,
            booked,
            self.tz,
        )
        return FacilityAvailability(facility_id=facility_id, date=on_date, slots=slots)
