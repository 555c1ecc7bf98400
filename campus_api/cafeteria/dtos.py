from datetime import date
from typing import List

from pydantic import BaseModel, Field

from campus_api.common.ids import RowId

# ============================================================
# Cafeteria Reservation DTO
# ============================================================


class CafeteriaReservationCreateDTO(BaseModel):
    # kept as str so that the strict YYYY-MM-DD check happens in the service
    reservation_date: str = Field(..., description='e.g. "2025-05-14"')
    meal_type_id: RowId


class CafeteriaReservationDTO(BaseModel):
    id: int
    student_id: str
    reservation_date: date
    meal_type_id: int
    status: str


class CafeteriaReservationListItemDTO(BaseModel):
    id: int
    reservation_date: date
    status: str
    meal_type_id: int
    meal_name: str


class CafeteriaReservationResponse(BaseModel):
    success: bool = True
    message: str
    data: CafeteriaReservationDTO


class CafeteriaReservationListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[CafeteriaReservationListItemDTO]


# ============================================================
# Meal types
# ============================================================


class MealTypeDTO(BaseModel):
    id: int
    name: str


class MealTypeListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[MealTypeDTO]

