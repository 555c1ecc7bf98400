# campus_api/reservations/schema.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlalchemy import Table
from sqlalchemy.sql import Select

CANCELLED = "cancelled"


@dataclass(frozen=True)
class ReservationSchema:
    """
    Describes one reservation table for the generic repository.

    - table / owner_column: where the rows live and who owns them
    - active_status: the status given on creation, also the only status
      that can be cancelled
    - reference_column: foreign key to the booked thing (meal type, facility)
    - list_select: builds the enriched listing query; the repository adds
      the owner filter
    """

    name: str
    table: Table
    active_status: str
    reference_column: str
    duplicate_message: str
    list_select: Callable[[], Select]
    owner_column: str = "student_id"
    cancelled_status: str = CANCELLED
