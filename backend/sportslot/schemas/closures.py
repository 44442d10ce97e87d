# backend/sportslot/schemas/closures.py

from datetime import date
from typing import Optional

from pydantic import model_validator

from .common import CamelModel


class ClosureCreate(CamelModel):
    start_date: date
    end_date: date
    reason: str = ""

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class ClosureRead(CamelModel):
    id: int
    start_date: str
    end_date: str
    reason: str
    state: str
    published: bool
    pending_deletion: bool
    created_at: Optional[str] = None
