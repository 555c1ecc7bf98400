# tests/test_facility_availability.py
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from campus_api.sports.services.facility_availability_service import (
    FacilityAvailabilityService,
)
from tests.conftest import BASKETBALL_COURT, TENNIS_COURT_A


def _url(facility_id, date=None):
    url = f"/api/sports-facilities/{facility_id}/availability"
    return f"{url}?date={date}" if date is not None else url


def test_open_day_has_two_slots(client):
    r = client.get(_url(TENNIS_COURT_A, "2025-05-14"))
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["facility_id"] == TENNIS_COURT_A
    assert data["date"] == "2025-05-14"
    assert data["available_slots"] == [
        {"start_time": "2025-05-14T09:00:00+00:00", "end_time": "2025-05-14T10:00:00+00:00"},
        {"start_time": "2025-05-14T10:00:00+00:00", "end_time": "2025-05-14T11:00:00+00:00"},
    ]


def test_booked_slot_is_excluded(client):
    booked = client.post(
        "/api/sports-reservations",
        json={
            "facility_id": TENNIS_COURT_A,
            "reservation_start_time": "2025-05-14T09:00:00+00:00",
            "reservation_end_time": "2025-05-14T10:00:00+00:00",
        },
    )
    assert booked.status_code == 201

    slots = client.get(_url(TENNIS_COURT_A, "2025-05-14")).json()["data"]["available_slots"]
    assert slots == [
        {"start_time": "2025-05-14T10:00:00+00:00", "end_time": "2025-05-14T11:00:00+00:00"},
    ]

    # other days are unaffected
    other_day = client.get(_url(TENNIS_COURT_A, "2025-05-15")).json()["data"]["available_slots"]
    assert len(other_day) == 2


def test_cancelled_booking_frees_slot(client):
    rid = client.post(
        "/api/sports-reservations",
        json={
            "facility_id": TENNIS_COURT_A,
            "reservation_start_time": "2025-05-14T10:00:00+00:00",
            "reservation_end_time": "2025-05-14T11:00:00+00:00",
        },
    ).json()["data"]["id"]
    client.patch(f"/api/sports-reservations/{rid}")

    slots = client.get(_url(TENNIS_COURT_A, "2025-05-14")).json()["data"]["available_slots"]
    assert len(slots) == 2


def test_partial_trailing_slot_is_dropped(client):
    # 08:00-12:00 in 90 minute steps -> 08:00, 09:30 (11:00-12:30 overruns)
    slots = client.get(_url(BASKETBALL_COURT, "2025-05-14")).json()["data"]["available_slots"]
    assert [s["start_time"] for s in slots] == [
        "2025-05-14T08:00:00+00:00",
        "2025-05-14T09:30:00+00:00",
    ]


def test_unknown_facility_is_404(client):
    r = client.get(_url(9999, "2025-05-14"))
    assert r.status_code == 404
    assert r.json()["detail"]["message"] == "Facility not found."


def test_invalid_date_is_400(client):
    r = client.get(_url(TENNIS_COURT_A, "14-05-2025"))
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "date"


def test_missing_date_is_400(client):
    r = client.get(_url(TENNIS_COURT_A))
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "date"


def test_requires_login(anon_client):
    assert anon_client.get(_url(TENNIS_COURT_A, "2025-05-14")).status_code == 401


def test_facility_timezone_converts_opening_hours(engine):
    """Opening hours are wall-clock in the facility zone; slots come back in UTC."""
    with engine.connect() as conn:
        service = FacilityAvailabilityService(conn, tz=ZoneInfo("Europe/Istanbul"))
        result = service.get_availability(TENNIS_COURT_A, "2025-05-14")

    # 09:00 Istanbul (+03:00) == 06:00 UTC
    assert [s.start for s in result.slots] == [
        datetime(2025, 5, 14, 6, 0, tzinfo=timezone.utc),
        datetime(2025, 5, 14, 7, 0, tzinfo=timezone.utc),
    ]
