# campus_api/availability/slot_calculator.py
"""
Bookable time slots for a sports facility on one calendar date.

Pure functions only: no I/O, the result depends on the arguments alone.

All returned timestamps are aware UTC datetimes. Opening and closing times
are wall-clock times in the facility timezone (tz) and are converted to
UTC instants before any comparison, so booked start times stored in UTC
match regardless of the caller's zone.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime


def _instant(on_date: date, at: time, tz: tzinfo) -> datetime:
    local = datetime.combine(on_date, at.replace(tzinfo=None), tzinfo=tz)
    return local.astimezone(timezone.utc)


def generate_slots(
    opening_time: time,
    closing_time: time,
    slot_duration_minutes: int,
    on_date: date,
    tz: Optional[tzinfo] = None,
) -> List[TimeSlot]:
    """
    Tile [opening, closing) with fixed-length slots.

    - the last slot is dropped when it would end after closing
    - opening >= closing gives an empty list
    """
    if slot_duration_minutes <= 0:
        raise ValueError("slot_duration_minutes must be a positive integer")

    tz = tz or timezone.utc
    if opening_time >= closing_time:
        return []

    cursor = _instant(on_date, opening_time, tz)
    closing = _instant(on_date, closing_time, tz)
    step = timedelta(minutes=slot_duration_minutes)

    slots: List[TimeSlot] = []
    while cursor < closing:
        end = cursor + step
        if end > closing:
            break
        slots.append(TimeSlot(start=cursor, end=end))
        cursor = end
    return slots


def available_slots(
    opening_time: time,
    closing_time: time,
    slot_duration_minutes: int,
    on_date: date,
    booked_start_times: Iterable[datetime],
    tz: Optional[tzinfo] = None,
) -> List[TimeSlot]:
    """Slots of generate_slots() whose start is not already booked."""
    booked = {b.astimezone(timezone.utc) for b in booked_start_times}
    return [
        slot
        for slot in generate_slots(opening_time, closing_time, slot_duration_minutes, on_date, tz)
        if slot.start not in booked
    ]


def day_bounds(on_date: date, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    """[start, end) of on_date in tz, as UTC instants."""
    tz = tz or timezone.utc
    start = _instant(on_date, time(0, 0), tz)
    end = _instant(on_date + timedelta(days=1), time(0, 0), tz)
    return start, end
