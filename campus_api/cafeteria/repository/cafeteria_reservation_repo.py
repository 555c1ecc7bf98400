# campus_api/cafeteria/repository/cafeteria_reservation_repo.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Connection
from sqlalchemy.sql import Select

from campus_api.db.tables import cafeteria_reservations, meal_types
from campus_api.reservations.repository.reservation_repo import ReservationRepository
from campus_api.reservations.schema import ReservationSchema


def _list_select() -> Select:
    cr = cafeteria_reservations
    mt = meal_types
    return (
        select(
            cr.c.id,
            cr.c.student_id,
            cr.c.reservation_date,
            cr.c.status,
            cr.c.meal_type_id,
            mt.c.name.label("meal_name"),
        )
        .select_from(cr.join(mt, cr.c.meal_type_id == mt.c.id))
        .order_by(cr.c.reservation_date.desc(), mt.c.name.asc(), cr.c.id.desc())
    )


CAFETERIA_RESERVATIONS = ReservationSchema(
    name="cafeteria",
    table=cafeteria_reservations,
    active_status="active",
    reference_column="meal_type_id",
    duplicate_message="You already have an active reservation for this meal on this date.",
    list_select=_list_select,
)


class CafeteriaReservationRepository(ReservationRepository):
    def __init__(self, conn: Connection) -> None:
        super().__init__(conn, CAFETERIA_RESERVATIONS)
