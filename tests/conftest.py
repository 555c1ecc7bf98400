# tests/conftest.py
from datetime import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert, select
from sqlalchemy.pool import StaticPool

from campus_api.auth_student.password import hash_password
from campus_api.auth_student.token_service import SessionTokenService, StudentPrincipal
from campus_api.config import get_settings
from campus_api.db.core import build_engine, get_connection
from campus_api.db.tables import (
    cafeteria_balances,
    meal_types,
    metadata,
    sports_facilities,
    sports_facility_types,
    students,
)
from campus_api.main import app

STUDENT_A = "6b1f7c2e-0d4a-4c3e-9a51-2f0e8b7d1a01"
STUDENT_B = "c93a0e55-7b2d-4f18-8e6c-5d4b3a2f1e02"
STUDENT_A_EMAIL = "ayse.yilmaz@university.edu.tr"
STUDENT_A_PASSWORD = "CorrectHorse9!"

BREAKFAST, LUNCH, DINNER = 1, 2, 3

TENNIS_COURT_A = 1        # 09:00-11:00, 60 min
TENNIS_COURT_B = 2        # under maintenance
ARCHERY_RANGE = 3         # type inactive
BASKETBALL_COURT = 4      # 08:00-12:00, 90 min


def seed(conn) -> None:
    """Two students, three meal types, four facilities, one balance row."""
    conn.execute(
        insert(students),
        [
            {
                "id": STUDENT_A,
                "student_id_no": "2021001234",
                "email": STUDENT_A_EMAIL,
                "full_name": "Ayse Yilmaz",
                # minimum bcrypt cost keeps the suite fast
                "password_hash": hash_password(STUDENT_A_PASSWORD, rounds=4),
            },
            {
                "id": STUDENT_B,
                "student_id_no": "2021005678",
                "email": "mehmet.demir@university.edu.tr",
                "full_name": "Mehmet Demir",
                "password_hash": hash_password("AnotherPass1!", rounds=4),
            },
        ],
    )
    conn.execute(
        insert(meal_types),
        [
            {"id": BREAKFAST, "name": "Breakfast"},
            {"id": LUNCH, "name": "Lunch"},
            {"id": DINNER, "name": "Dinner"},
        ],
    )
    conn.execute(
        insert(sports_facility_types),
        [
            {
                "id": 1,
                "name": "Tennis",
                "opening_time": time(9, 0),
                "closing_time": time(11, 0),
                "slot_duration_minutes": 60,
                "is_active": True,
            },
            {
                "id": 2,
                "name": "Archery",
                "opening_time": time(10, 0),
                "closing_time": time(16, 0),
                "slot_duration_minutes": 60,
                "is_active": False,
            },
            {
                "id": 3,
                "name": "Basketball",
                "opening_time": time(8, 0),
                "closing_time": time(12, 0),
                "slot_duration_minutes": 90,
                "is_active": True,
            },
        ],
    )
    conn.execute(
        insert(sports_facilities),
        [
            {"id": TENNIS_COURT_A, "name": "Tennis Court A", "status": "available",
             "location_details": "North Campus", "facility_type_id": 1},
            {"id": TENNIS_COURT_B, "name": "Tennis Court B", "status": "maintenance",
             "location_details": "North Campus", "facility_type_id": 1},
            {"id": ARCHERY_RANGE, "name": "Archery Range", "status": "available",
             "location_details": None, "facility_type_id": 2},
            {"id": BASKETBALL_COURT, "name": "Basketball Court 1", "status": "available",
             "location_details": "Sports Hall", "facility_type_id": 3},
        ],
    )
    conn.execute(insert(cafeteria_balances).values(student_id=STUDENT_A, balance=125.5))
    conn.commit()


@pytest.fixture
def engine():
    """
    - SQLite in-memory (StaticPool): app and test share one connection
    - metadata.create_all() + seed
    - get_connection overridden to borrow from this engine
    """
    eng = build_engine("sqlite://", poolclass=StaticPool)
    metadata.create_all(eng)
    with eng.connect() as conn:
        seed(conn)

    def override_get_connection():
        conn = eng.connect()
        try:
            yield conn
        finally:
            conn.close()

    app.dependency_overrides[get_connection] = override_get_connection
    try:
        yield eng
    finally:
        app.dependency_overrides.clear()
        eng.dispose()


def session_cookie(student_id: str) -> dict:
    token = SessionTokenService(get_settings()).issue(StudentPrincipal(student_id=student_id))
    return {get_settings().session_cookie_name: token}


@pytest.fixture
def anon_client(engine):
    return TestClient(app)


@pytest.fixture
def client(engine):
    """Logged in as STUDENT_A."""
    return TestClient(app, cookies=session_cookie(STUDENT_A))


@pytest.fixture
def other_client(engine):
    """Logged in as STUDENT_B."""
    return TestClient(app, cookies=session_cookie(STUDENT_B))


def fetch_row(engine, table, row_id):
    with engine.connect() as conn:
        row = conn.execute(select(table).where(table.c.id == row_id)).mappings().first()
    return dict(row) if row else None
