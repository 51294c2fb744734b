"""Shared schema config and response envelopes.

Learn: The wire format is camelCase (listId, authorId) while Python code
stays snake_case. alias_generator handles the mapping in both
directions; populate_by_name lets tests and services use either.
Every response is wrapped as {"success": ..., "message": ...}.
"""

from datetime import datetime, timezone

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}

READ_CONFIG = {**CAMEL_CONFIG, "from_attributes": True}


def as_utc(value: datetime) -> datetime:
    """Express value in UTC; naive values are taken to be UTC already.

    SQLite keeps only the wall-clock time of a DateTime(timezone=True)
    column, so everything is stored and returned as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
