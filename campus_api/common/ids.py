# campus_api/common/ids.py
from typing import Annotated

from pydantic import Field

# Integer columns are 32-bit signed on PostgreSQL
MAX_ID = 2**31 - 1

RowId = Annotated[int, Field(ge=1, le=MAX_ID)]
