# tests/test_auth.py
from datetime import datetime, timedelta, timezone

import jwt
from fastapi.testclient import TestClient

from campus_api.config import get_settings
from campus_api.main import app
from tests.conftest import STUDENT_A, STUDENT_A_EMAIL, STUDENT_A_PASSWORD


def _client_with_token(token: str) -> TestClient:
    return TestClient(app, cookies={get_settings().session_cookie_name: token})


def _token(**claims) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {"iat": now, "exp": now + timedelta(hours=1)}
    payload.update(claims)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


# ============================================================
# login / logout
# ============================================================
def test_login_sets_session_cookie(anon_client):
    r = anon_client.post("/api/login", json={"mail": STUDENT_A_EMAIL, "password": STUDENT_A_PASSWORD})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["data"] == {
        "student_id": STUDENT_A,
        "email": STUDENT_A_EMAIL,
        "student_id_no": "2021001234",
    }

    cookie_name = get_settings().session_cookie_name
    assert cookie_name in r.cookies
    assert "httponly" in r.headers["set-cookie"].lower()

    # the client keeps the cookie, so protected routes now work
    assert anon_client.get("/api/cafeteria-reservations").status_code == 200


def test_login_email_is_case_insensitive(anon_client):
    r = anon_client.post(
        "/api/login",
        json={"mail": STUDENT_A_EMAIL.upper(), "password": STUDENT_A_PASSWORD},
    )
    assert r.status_code == 200


def test_login_wrong_password(anon_client):
    r = anon_client.post("/api/login", json={"mail": STUDENT_A_EMAIL, "password": "nope"})
    assert r.status_code == 401
    assert r.json()["detail"]["message"] == "Invalid credentials"


def test_login_unknown_email(anon_client):
    r = anon_client.post("/api/login", json={"mail": "ghost@university.edu.tr", "password": "x"})
    assert r.status_code == 401


def test_login_missing_fields(anon_client):
    r = anon_client.post("/api/login", json={"mail": STUDENT_A_EMAIL})
    assert r.status_code == 400
    assert r.json()["detail"]["message"] == "Email and password are required"


def test_logout_clears_cookie(client):
    r = client.post("/api/logout")
    assert r.status_code == 200
    set_cookie = r.headers["set-cookie"]
    assert set_cookie.startswith(f"{get_settings().session_cookie_name}=")
    assert "max-age=0" in set_cookie.lower()


# ============================================================
# session verification
# ============================================================
def test_missing_cookie_is_401(anon_client):
    r = anon_client.get("/api/cafeteria-reservations")
    assert r.status_code == 401
    assert r.json()["detail"]["message"] == "Authentication required. Please login."


def test_expired_token_is_401(engine):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = _token(studentId=STUDENT_A, iat=past, exp=past + timedelta(hours=1))

    r = _client_with_token(token).get("/api/cafeteria-reservations")
    assert r.status_code == 401
    assert r.json()["detail"]["message"] == "Session expired. Please login again."


def test_tampered_token_is_401(engine):
    token = jwt.encode({"studentId": STUDENT_A}, "an-entirely-different-signing-secret-value", algorithm="HS256")

    r = _client_with_token(token).get("/api/cafeteria-reservations")
    assert r.status_code == 401
    assert r.json()["detail"]["message"] == "Invalid session. Please login again."


def test_token_without_student_id_is_401(engine):
    r = _client_with_token(_token(email=STUDENT_A_EMAIL)).get("/api/cafeteria-reservations")
    assert r.status_code == 401
    assert r.json()["detail"]["message"] == "Invalid token: Student ID missing."
