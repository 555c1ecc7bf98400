from typing import Optional

from pydantic import BaseModel


class BalanceDTO(BaseModel):
    id: int
    student_id: str
    balance: float


class BalanceResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: Optional[BalanceDTO] = None
