# backend/sportslot/schemas/common.py

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def TimeField(**kwargs):
    """"HH:MM" string, 00:00 to 23:59."""
    return Field(pattern=TIME_PATTERN, **kwargs)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; readable from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
