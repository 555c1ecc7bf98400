# campus_api/db/tables.py
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Time,
    text,
)
from sqlalchemy.types import TypeDecorator


class UtcDateTime(TypeDecorator):
    """
    Timezone-aware timestamp stored as UTC.

    Naive values are rejected on bind; values read back are always aware UTC,
    also on SQLite which has no native timezone support.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime is not allowed for UtcDateTime")
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


metadata = MetaData()

NOT_CANCELLED = text("status != 'cancelled'")


# ------------------------------------------------------
# students
# ------------------------------------------------------
students = Table(
    "students",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("student_id_no", String(32), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=True),
    Column("password_hash", String(255), nullable=False),
    Column("created_at", UtcDateTime(), nullable=False, default=_utcnow),
)


# ------------------------------------------------------
# cafeteria
# ------------------------------------------------------
meal_types = Table(
    "meal_types",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(64), nullable=False, unique=True),
)

cafeteria_reservations = Table(
    "cafeteria_reservations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("student_id", String(36), ForeignKey("students.id"), nullable=False),
    Column("reservation_date", Date, nullable=False),
    Column("meal_type_id", Integer, ForeignKey("meal_types.id"), nullable=False),
    Column("status", String(16), nullable=False, server_default="active"),
    Column("created_at", UtcDateTime(), nullable=False, default=_utcnow),
    Index("ix_cafeteria_reservations_student_id", "student_id"),
    # one live booking per (student, date, meal type)
    Index(
        "uq_cafeteria_reservations_live",
        "student_id",
        "reservation_date",
        "meal_type_id",
        unique=True,
        sqlite_where=NOT_CANCELLED,
        postgresql_where=NOT_CANCELLED,
    ),
)


# ------------------------------------------------------
# sports
# ------------------------------------------------------
sports_facility_types = Table(
    "sports_facility_types",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(64), nullable=False),
    Column("opening_time", Time, nullable=False),
    Column("closing_time", Time, nullable=False),
    Column("slot_duration_minutes", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    CheckConstraint("slot_duration_minutes > 0", name="ck_sports_facility_types_slot_duration"),
)

sports_facilities = Table(
    "sports_facilities",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(128), nullable=False),
    Column("status", String(16), nullable=False, server_default="available"),
    Column("location_details", String(255), nullable=True),
    Column(
        "facility_type_id",
        Integer,
        ForeignKey("sports_facility_types.id"),
        nullable=False,
    ),
)

sports_reservations = Table(
    "sports_reservations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("student_id", String(36), ForeignKey("students.id"), nullable=False),
    Column("facility_id", Integer, ForeignKey("sports_facilities.id"), nullable=False),
    Column("reservation_start_time", UtcDateTime(), nullable=False),
    Column("reservation_end_time", UtcDateTime(), nullable=False),
    Column("status", String(16), nullable=False, server_default="confirmed"),
    Column("created_at", UtcDateTime(), nullable=False, default=_utcnow),
    CheckConstraint(
        "reservation_start_time < reservation_end_time",
        name="ck_sports_reservations_interval",
    ),
    Index("ix_sports_reservations_student_id", "student_id"),
    # a facility cannot be booked twice for the same start
    Index(
        "uq_sports_reservations_live",
        "facility_id",
        "reservation_start_time",
        unique=True,
        sqlite_where=NOT_CANCELLED,
        postgresql_where=NOT_CANCELLED,
    ),
)


# ------------------------------------------------------
# balances
# ------------------------------------------------------
cafeteria_balances = Table(
    "cafeteria_balances",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("student_id", String(36), ForeignKey("students.id"), nullable=False, unique=True),
    Column("balance", Numeric(10, 2, asdecimal=False), nullable=False, server_default="0"),
)

sports_balances = Table(
    "sports_balances",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("student_id", String(36), ForeignKey("students.id"), nullable=False, unique=True),
    Column("balance", Numeric(10, 2, asdecimal=False), nullable=False, server_default="0"),
)
