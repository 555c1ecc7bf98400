# campus_api/db/init_db.py
"""
Create the schema (CREATE TABLE IF NOT EXISTS semantics) and optionally
insert demo reference data.

    python -m campus_api.db.init_db            # tables only
    python -m campus_api.db.init_db --seed     # tables + demo rows
"""
from __future__ import annotations

import argparse
import logging
import uuid
from datetime import time

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, Engine

from campus_api.auth_student.password import hash_password
from campus_api.db.core import dispose_engine, init_engine
from campus_api.db.tables import (
    cafeteria_balances,
    meal_types,
    metadata,
    sports_balances,
    sports_facilities,
    sports_facility_types,
    students,
)

logger = logging.getLogger(__name__)

DEMO_MEAL_TYPES = ["Breakfast", "Lunch", "Dinner"]

DEMO_FACILITY_TYPES = [
    # name, opening, closing, slot minutes
    ("Tennis Court", time(9, 0), time(21, 0), 60),
    ("Basketball Court", time(8, 0), time(22, 0), 90),
    ("Swimming Pool", time(7, 0), time(19, 0), 45),
]


def create_tables(engine: Engine) -> None:
    metadata.create_all(engine)
    logger.info("[INIT_DB] tables ensured: %s", ", ".join(t.name for t in metadata.sorted_tables))


def seed_demo_data(conn: Connection) -> None:
    """Insert demo rows unless reference data already exists."""
    if conn.execute(select(meal_types.c.id).limit(1)).first() is not None:
        logger.info("[INIT_DB] reference data already present, skipping seed")
        return

    conn.execute(insert(meal_types), [{"name": n} for n in DEMO_MEAL_TYPES])

    for name, opening, closing, minutes in DEMO_FACILITY_TYPES:
        type_id = conn.execute(
            insert(sports_facility_types).values(
                name=name,
                opening_time=opening,
                closing_time=closing,
                slot_duration_minutes=minutes,
                is_active=True,
            )
        ).inserted_primary_key[0]
        conn.execute(
            insert(sports_facilities).values(
                name=f"{name} 1",
                status="available",
                location_details="Main Campus Sports Center",
                facility_type_id=type_id,
            )
        )

    student_id = str(uuid.uuid4())
    conn.execute(
        insert(students).values(
            id=student_id,
            student_id_no="2021001234",
            email="demo.student@university.edu.tr",
            full_name="Demo Student",
            password_hash=hash_password("DemoPass123!"),
        )
    )
    conn.execute(insert(cafeteria_balances).values(student_id=student_id, balance=250.0))
    conn.execute(insert(sports_balances).values(student_id=student_id, balance=100.0))
    conn.commit()
    logger.info("[INIT_DB] demo data inserted (student=%s)", student_id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialise the campus reservations database")
    parser.add_argument("--seed", action="store_true", help="insert demo reference data")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    engine = init_engine()
    try:
        create_tables(engine)
        if args.seed:
            with engine.connect() as conn:
                seed_demo_data(conn)
    finally:
        dispose_engine()


if __name__ == "__main__":
    main()
