# campus_api/balances/balance_repo.py
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import Table, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from campus_api.db.errors import to_domain_error


class BalanceRepository:
    """
    Read-only balance lookup. One instance per balance table
    (cafeteria_balances / sports_balances).
    """

    def __init__(self, conn: Connection, table: Table) -> None:
        self.conn = conn
        self.table = table

    def get_for_student(self, student_id: str) -> Optional[Dict[str, Any]]:
        t = self.table
        stmt = select(t.c.id, t.c.student_id, t.c.balance).where(t.c.student_id == student_id)
        try:
            row = self.conn.execute(stmt).mappings().first()
        except DBAPIError as e:
            self.conn.rollback()
            raise to_domain_error(e) from e
        return dict(row) if row else None
