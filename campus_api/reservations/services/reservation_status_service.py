# campus_api/reservations/services/reservation_status_service.py
from __future__ import annotations

import logging
from typing import Any, Dict

from campus_api.common.errors import ConflictError, ForbiddenError, NotFoundError
from campus_api.reservations.repository.reservation_repo import ReservationRepository

logger = logging.getLogger(__name__)


class ReservationStatusService:
    """
    Owns the status transitions of a single reservation.

    States:
        active / confirmed (initial) -> cancelled (terminal)

    The cancel rule (row exists, caller owns it, status is cancellable) is
    applied by one conditional UPDATE. Only when that UPDATE touches no row
    is the row read again, to tell the caller which condition failed.
    """

    def __init__(self, repo: ReservationRepository) -> None:
        self.repo = repo
        self.schema = repo.schema

    # -------------------------------------------------
    # CANCEL
    # -------------------------------------------------
    def cancel(self, reservation_id: int, student_id: str) -> Dict[str, Any]:
        updated = self.repo.cancel_if_active(reservation_id, student_id)
        if updated is not None:
            logger.info(
                "[%sReservation] cancelled id=%s owner=%s",
                self.schema.name.capitalize(),
                reservation_id,
                student_id,
            )
            return updated

        row = self.repo.get(reservation_id)
        if row is None:
            raise NotFoundError("Reservation not found.")

        if str(row[self.schema.owner_column]) != str(student_id):
            raise ForbiddenError("Forbidden: You cannot cancel this reservation.")

        current = row["status"]
        raise ConflictError(
            f"Reservation cannot be cancelled. Its current status is: {current}."
        )
