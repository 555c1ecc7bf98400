# campus_api/cafeteria/repository/meal_type_repo.py
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from campus_api.db.errors import to_domain_error
from campus_api.db.tables import meal_types


class MealTypeRepository:
    """Read-only access to meal_types (reference data)."""

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def list_meal_types(self) -> List[Dict[str, Any]]:
        stmt = select(meal_types.c.id, meal_types.c.name).order_by(meal_types.c.id.asc())
        try:
            rows = self.conn.execute(stmt).mappings().all()
        except DBAPIError as e:
            self.conn.rollback()
            raise to_domain_error(e) from e
        return [dict(r) for r in rows]
