# campus_api/db/errors.py
"""
Storage-layer error classification.

This is the only place that looks at driver specific codes (PostgreSQL
SQLSTATE, SQLite messages). Everything above it works with the kinds
returned here.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import DBAPIError, DataError, InterfaceError, OperationalError

from campus_api.common.errors import (
    CampusDomainError,
    DuplicateBookingError,
    InternalError,
    InvalidReferenceError,
    UnavailableError,
    ValidationError,
)

UNIQUE_VIOLATION = "unique_violation"
FOREIGN_KEY_VIOLATION = "foreign_key_violation"
CHECK_VIOLATION = "check_violation"
NOT_NULL_VIOLATION = "not_null_violation"
INVALID_VALUE = "invalid_value"
UNAVAILABLE = "unavailable"
UNKNOWN = "unknown"

# PostgreSQL SQLSTATE -> kind
_PG_CODES = {
    "23505": UNIQUE_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
    "23514": CHECK_VIOLATION,
    "23502": NOT_NULL_VIOLATION,
    "22007": INVALID_VALUE,   # invalid_datetime_format
    "22008": INVALID_VALUE,   # datetime_field_overflow
    "22003": INVALID_VALUE,   # numeric_value_out_of_range
    "22P02": INVALID_VALUE,   # invalid_text_representation
}

# SQLite message prefix -> kind
_SQLITE_MESSAGES = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("CHECK constraint failed", CHECK_VIOLATION),
    ("NOT NULL constraint failed", NOT_NULL_VIOLATION),
)


def _pg_code(orig: object) -> Optional[str]:
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def classify_db_error(exc: BaseException) -> str:
    if isinstance(exc, (OperationalError, InterfaceError)):
        code = _pg_code(getattr(exc, "orig", None))
        if code and code.startswith("08"):
            return UNAVAILABLE
        message = str(getattr(exc, "orig", exc)).lower()
        if "database is locked" in message:
            return UNAVAILABLE
        if isinstance(exc, InterfaceError) or "connect" in message or "closed" in message:
            return UNAVAILABLE
        return UNKNOWN

    if not isinstance(exc, DBAPIError):
        return UNKNOWN

    code = _pg_code(exc.orig)
    if code:
        return _PG_CODES.get(code, UNKNOWN)

    message = str(exc.orig)
    for prefix, kind in _SQLITE_MESSAGES:
        if message.startswith(prefix):
            return kind

    if isinstance(exc, DataError):
        return INVALID_VALUE
    return UNKNOWN


def to_domain_error(
    exc: BaseException,
    *,
    duplicate_message: str = "The record already exists.",
    reference_field: Optional[str] = None,
) -> CampusDomainError:
    """Translate a SQLAlchemy/driver exception into the domain taxonomy."""
    kind = classify_db_error(exc)

    if kind == UNIQUE_VIOLATION:
        return DuplicateBookingError(duplicate_message)
    if kind == FOREIGN_KEY_VIOLATION:
        field = reference_field or "reference"
        return InvalidReferenceError(
            f"{field} does not reference an existing record.",
            field=reference_field,
        )
    if kind in (CHECK_VIOLATION, NOT_NULL_VIOLATION, INVALID_VALUE):
        return ValidationError("The submitted values were rejected by the database.")
    if kind == UNAVAILABLE:
        return UnavailableError(str(exc))
    return InternalError(str(exc))
