# campus_api/reservations/repository/reservation_repo.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from campus_api.db.errors import to_domain_error
from campus_api.reservations.schema import ReservationSchema

logger = logging.getLogger(__name__)


class ReservationRepository:
    """
    Generic reservation repository (one instance per ReservationSchema).

    Responsibilities:
    - insert / read / conditional status update of reservation rows
    - commit / rollback of those single statements
    - translating storage errors into the domain taxonomy

    Which transitions are legal is decided by ReservationStatusService.
    """

    def __init__(self, conn: Connection, schema: ReservationSchema) -> None:
        self.conn = conn
        self.schema = schema
        self.table = schema.table

    @property
    def _owner(self):
        return self.table.c[self.schema.owner_column]

    def _fail(self, exc: DBAPIError):
        self.conn.rollback()
        return to_domain_error(
            exc,
            duplicate_message=self.schema.duplicate_message,
            reference_field=self.schema.reference_column,
        )

    # -----------------------------
    # READ
    # -----------------------------
    def get(self, reservation_id: int) -> Optional[Dict[str, Any]]:
        stmt = select(self.table).where(self.table.c.id == reservation_id)
        try:
            row = self.conn.execute(stmt).mappings().first()
        except DBAPIError as e:
            raise self._fail(e) from e
        return dict(row) if row else None

    def list_for_owner(self, owner_id: str) -> List[Dict[str, Any]]:
        stmt = self.schema.list_select().where(self._owner == owner_id)
        try:
            rows = self.conn.execute(stmt).mappings().all()
        except DBAPIError as e:
            raise self._fail(e) from e
        return [dict(r) for r in rows]

    # -----------------------------
    # WRITE
    # -----------------------------
    def insert(self, owner_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a row in the schema's active status and return it.

        The uniqueness and foreign-key constraints are the only guard
        against double booking; a violation surfaces as a domain error.
        """
        stmt = insert(self.table).values(
            **values,
            **{self.schema.owner_column: owner_id, "status": self.schema.active_status},
        )
        try:
            result = self.conn.execute(stmt)
            new_id = result.inserted_primary_key[0]
            row = self.conn.execute(
                select(self.table).where(self.table.c.id == new_id)
            ).mappings().one()
            self.conn.commit()
        except DBAPIError as e:
            raise self._fail(e) from e

        logger.info(
            "[%sReservation] created id=%s owner=%s",
            self.schema.name.capitalize(),
            new_id,
            owner_id,
        )
        return dict(row)

    def cancel_if_active(self, reservation_id: int, owner_id: str) -> Optional[Dict[str, Any]]:
        """
        UPDATE ... SET status='cancelled' WHERE id=? AND owner=? AND status=<active>.

        Returns the updated row, or None when no row matched all three
        conditions.
        """
        stmt = (
            update(self.table)
            .where(self.table.c.id == reservation_id)
            .where(self._owner == owner_id)
            .where(self.table.c.status == self.schema.active_status)
            .values(status=self.schema.cancelled_status)
        )
        try:
            result = self.conn.execute(stmt)
            if result.rowcount == 0:
                self.conn.rollback()
                return None
            row = self.conn.execute(
                select(self.table).where(self.table.c.id == reservation_id)
            ).mappings().one()
            self.conn.commit()
        except DBAPIError as e:
            raise self._fail(e) from e

        return dict(row)
