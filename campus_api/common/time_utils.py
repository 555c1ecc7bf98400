# campus_api/common/time_utils.py
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from campus_api.common.errors import ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_date(value: str, *, field: str) -> date:
    """
    Strict "YYYY-MM-DD" parsing.

    "2025-2-1" and impossible dates such as "2025-02-30" are both rejected.
    """
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(
            f"{field} must be a date in YYYY-MM-DD format.",
            field=field,
        )
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} is not a valid calendar date.", field=field)


def resolve_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name or "UTC")
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"unknown timezone: {name!r}") from e


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError("naive datetime")
    return value.astimezone(timezone.utc)


def utc_isoformat(value: datetime) -> str:
    """2025-05-01T09:00:00+00:00"""
    return to_utc(value).isoformat()
