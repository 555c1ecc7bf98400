# campus_api/sports/repository/facility_repo.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from campus_api.db.errors import to_domain_error
from campus_api.db.tables import sports_facilities, sports_facility_types, sports_reservations
from campus_api.reservations.schema import CANCELLED


class FacilityRepository:
    """
    Sports facilities and their operating rules (reference data, read-only),
    plus the booked start times the availability calculator needs.
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def _fetch_all(self, stmt) -> List[Dict[str, Any]]:
        try:
            rows = self.conn.execute(stmt).mappings().all()
        except DBAPIError as e:
            self.conn.rollback()
            raise to_domain_error(e) from e
        return [dict(r) for r in rows]

    # ---------------------------------------------------------
    # facilities
    # ---------------------------------------------------------
    def list_available_facilities(self) -> List[Dict[str, Any]]:
        sf = sports_facilities
        sft = sports_facility_types
        stmt = (
            select(
                sf.c.id.label("facility_id"),
                sf.c.name.label("facility_name"),
                sf.c.status.label("facility_status"),
                sf.c.location_details,
                sft.c.id.label("type_id"),
                sft.c.name.label("type_name"),
                sft.c.opening_time,
                sft.c.closing_time,
                sft.c.slot_duration_minutes,
            )
            .select_from(sf.join(sft, sf.c.facility_type_id == sft.c.id))
            .where(sf.c.status == "available")
            .where(sft.c.is_active.is_(True))
            .order_by(sft.c.name.asc(), sf.c.name.asc())
        )
        return self._fetch_all(stmt)

    def get_facility_rules(self, facility_id: int) -> Optional[Dict[str, Any]]:
        sf = sports_facilities
        sft = sports_facility_types
        stmt = (
            select(
                sf.c.id.label("facility_id"),
                sft.c.opening_time,
                sft.c.closing_time,
                sft.c.slot_duration_minutes,
            )
            .select_from(sf.join(sft, sf.c.facility_type_id == sft.c.id))
            .where(sf.c.id == facility_id)
            .limit(1)
        )
        rows = self._fetch_all(stmt)
        return rows[0] if rows else None

    # ---------------------------------------------------------
    # bookings
    # ---------------------------------------------------------
    def list_booked_start_times(
        self,
        facility_id: int,
        *,
        window_start: datetime,
        window_end: datetime,
    ) -> List[datetime]:
        """Start times of live reservations with window_start <= start < window_end."""
        sr = sports_reservations
        stmt = (
            select(sr.c.reservation_start_time)
            .where(sr.c.facility_id == facility_id)
            .where(sr.c.status != CANCELLED)
            .where(sr.c.reservation_start_time >= window_start)
            .where(sr.c.reservation_start_time < window_end)
        )
        return [r["reservation_start_time"] for r in self._fetch_all(stmt)]
