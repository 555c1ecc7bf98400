# campus_api/auth_student/student_repo.py
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from campus_api.db.errors import to_domain_error
from campus_api.db.tables import students


class StudentRepository:
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        stmt = (
            select(
                students.c.id,
                students.c.student_id_no,
                students.c.email,
                students.c.password_hash,
            )
            .where(func.lower(students.c.email) == email.strip().lower())
            .limit(1)
        )
        try:
            row = self.conn.execute(stmt).mappings().first()
        except DBAPIError as e:
            self.conn.rollback()
            raise to_domain_error(e) from e
        return dict(row) if row else None
