# campus_api/balances/balance_api.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import Table
from sqlalchemy.engine import Connection

from campus_api.auth_student.dependencies import get_current_student
from campus_api.auth_student.token_service import StudentPrincipal
from campus_api.balances.balance_repo import BalanceRepository
from campus_api.balances.dtos import BalanceDTO, BalanceResponse
from campus_api.common.errors import (
    CampusDomainError,
    domain_error_to_http,
    unexpected_error_to_http,
)
from campus_api.db.core import get_connection
from campus_api.db.tables import cafeteria_balances, sports_balances

router = APIRouter(tags=["balances"])


def _balance_response(conn: Connection, table: Table, student_id: str, label: str) -> BalanceResponse:
    try:
        row = BalanceRepository(conn, table).get_for_student(student_id)
    except CampusDomainError as e:
        raise domain_error_to_http(e)
    except Exception as e:
        raise unexpected_error_to_http(e, context="Balance")

    # no balance row yet is not an error
    if row is None:
        return BalanceResponse(
            message=f"No {label} balance record found for this student.",
            data=None,
        )
    return BalanceResponse(data=BalanceDTO(**row))


@router.get("/cafeteria-balance", response_model=BalanceResponse)
def get_cafeteria_balance(
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    return _balance_response(conn, cafeteria_balances, student.student_id, "cafeteria")


@router.get("/sports-balance", response_model=BalanceResponse)
def get_sports_balance(
    student: StudentPrincipal = Depends(get_current_student),
    conn: Connection = Depends(get_connection),
):
    return _balance_response(conn, sports_balances, student.student_id, "sport")
