# tests/test_reservation_status_service.py
import threading
from datetime import date

import pytest
from sqlalchemy import insert

from campus_api.cafeteria.services.cafeteria_reservation_service import (
    CafeteriaReservationService,
)
from campus_api.common.errors import ConflictError, ForbiddenError, NotFoundError
from campus_api.db.core import build_engine
from campus_api.db.tables import cafeteria_reservations, metadata
from tests.conftest import LUNCH, STUDENT_A, STUDENT_B, fetch_row, seed


@pytest.fixture
def file_engine(tmp_path):
    """File-backed SQLite so that two connections really compete for the row."""
    eng = build_engine(f"sqlite:///{tmp_path / 'campus_test.db'}")
    metadata.create_all(eng)
    with eng.connect() as conn:
        seed(conn)
    try:
        yield eng
    finally:
        eng.dispose()


def _create_reservation(engine, student_id=STUDENT_A):
    with engine.connect() as conn:
        row = CafeteriaReservationService(conn).create(student_id, "2025-05-14", LUNCH)
    return row["id"]


def test_concurrent_cancel_exactly_one_wins(file_engine):
    rid = _create_reservation(file_engine)

    barrier = threading.Barrier(2)
    results = []
    lock = threading.Lock()

    def worker():
        with file_engine.connect() as conn:
            service = CafeteriaReservationService(conn)
            barrier.wait()
            try:
                service.cancel(rid, STUDENT_A)
                outcome = "ok"
            except ConflictError:
                outcome = "conflict"
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    assert sorted(results) == ["conflict", "ok"]
    assert fetch_row(file_engine, cafeteria_reservations, rid)["status"] == "cancelled"


def test_cancel_failures_are_classified(file_engine):
    rid = _create_reservation(file_engine)

    with file_engine.connect() as conn:
        service = CafeteriaReservationService(conn)

        with pytest.raises(NotFoundError):
            service.cancel(rid + 100, STUDENT_A)

        with pytest.raises(ForbiddenError):
            service.cancel(rid, STUDENT_B)
        assert service.repo.get(rid)["status"] == "active"

        assert service.cancel(rid, STUDENT_A)["status"] == "cancelled"

        with pytest.raises(ConflictError) as exc:
            service.cancel(rid, STUDENT_A)
        assert exc.value.message == "Reservation cannot be cancelled. Its current status is: cancelled."


def test_status_written_outside_the_state_machine_is_conflict(file_engine):
    """A row in any non-active status cannot be cancelled by its owner."""
    with file_engine.connect() as conn:
        rid = conn.execute(
            insert(cafeteria_reservations).values(
                student_id=STUDENT_A,
                reservation_date=date(2025, 6, 1),
                meal_type_id=LUNCH,
                status="served",
            )
        ).inserted_primary_key[0]
        conn.commit()

        with pytest.raises(ConflictError):
            CafeteriaReservationService(conn).cancel(rid, STUDENT_A)
