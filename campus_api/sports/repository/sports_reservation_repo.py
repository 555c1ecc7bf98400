# campus_api/sports/repository/sports_reservation_repo.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Connection
from sqlalchemy.sql import Select

from campus_api.db.tables import sports_facilities, sports_facility_types, sports_reservations
from campus_api.reservations.repository.reservation_repo import ReservationRepository
from campus_api.reservations.schema import ReservationSchema


def _list_select() -> Select:
    sr = sports_reservations
    sf = sports_facilities
    sft = sports_facility_types
    return (
        select(
            sr.c.id,
            sr.c.student_id,
            sr.c.facility_id,
            sr.c.reservation_start_time,
            sr.c.reservation_end_time,
            sr.c.status,
            sf.c.name.label("facility_name"),
            sf.c.location_details,
            sft.c.name.label("facility_type_name"),
        )
        .select_from(
            sr.join(sf, sr.c.facility_id == sf.c.id).join(
                sft, sf.c.facility_type_id == sft.c.id
            )
        )
        .order_by(sr.c.reservation_start_time.desc(), sr.c.id.desc())
    )


SPORTS_RESERVATIONS = ReservationSchema(
    name="sports",
    table=sports_reservations,
    active_status="confirmed",
    reference_column="facility_id",
    duplicate_message="This facility is already booked for the selected time slot.",
    list_select=_list_select,
)


class SportsReservationRepository(ReservationRepository):
    def __init__(self, conn: Connection) -> None:
        super().__init__(conn, SPORTS_RESERVATIONS)
