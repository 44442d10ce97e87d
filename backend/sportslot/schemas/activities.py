# backend/sportslot/schemas/activities.py

from typing import Optional

from pydantic import Field

from .common import CamelModel


class ActivityCreate(CamelModel):
    name: str = Field(min_length=1)
    icon: str = ""
    enabled: bool = True
    sort_order: int = 0


class ActivityUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    icon: Optional[str] = None
    enabled: Optional[bool] = None
    sort_order: Optional[int] = None


class ActivityRead(CamelModel):
    id: int
    name: str
    icon: str
    enabled: bool
    sort_order: int
