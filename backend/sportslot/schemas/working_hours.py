# backend/sportslot/schemas/working_hours.py

from pydantic import Field, model_validator

from .common import CamelModel, TimeField


class WorkingHoursItem(CamelModel):
    day_of_week: int = Field(ge=0, le=6)  # 0 = Sunday
    enabled: bool
    start_time: str = TimeField()
    end_time: str = TimeField()

    @model_validator(mode="after")
    def check_window(self):
        if self.enabled and self.start_time >= self.end_time:
            raise ValueError("startTime must be before endTime")
        return self


class WorkingHoursUpdate(CamelModel):
    hours: list[WorkingHoursItem] = Field(min_length=1, max_length=7)

    @model_validator(mode="after")
    def check_unique_days(self):
        days = [h.day_of_week for h in self.hours]
        if len(days) != len(set(days)):
            raise ValueError("dayOfWeek must be unique")
        return self


class WorkingHoursResult(CamelModel):
    hours: list[WorkingHoursItem]
    reclassified: int = 0
