"""Pydantic schemas for tasks.

Learn: Deadline handling mirrors the product rules:
- missing or empty → the service fills in now + 24h
- supplied → must parse (ISO string or unix timestamp) and lie in the future
Deadlines are stored in UTC; naive datetimes are taken as UTC.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from todolist.db.models import TASK_STATUSES
from todolist.schemas.common import CAMEL_CONFIG, READ_CONFIG, as_utc

STATUS_PATTERN = "^(" + "|".join(TASK_STATUSES) + ")$"


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1, max_length=500)
    list_id: uuid.UUID
    status: str = Field(default="ACTIVE", pattern=STATUS_PATTERN)
    deadline: Optional[datetime] = None

    model_config = CAMEL_CONFIG

    @field_validator("deadline", mode="before")
    @classmethod
    def empty_deadline(cls, v):
        if v in ("", 0):
            return None
        return v

    @field_validator("deadline")
    @classmethod
    def future_deadline(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is None:
            return None
        v = as_utc(v)
        if v <= datetime.now(timezone.utc):
            raise ValueError("Deadline must be a valid future date or empty")
        return v


class TaskStatusUpdate(BaseModel):
    id: uuid.UUID
    status: str = Field(..., pattern=STATUS_PATTERN)


class TaskDelete(BaseModel):
    id: uuid.UUID


class TaskRead(BaseModel):
    id: uuid.UUID
    title: str
    body: str
    list_id: uuid.UUID
    author_id: uuid.UUID
    status: str
    deadline: datetime
    created_at: datetime

    model_config = READ_CONFIG

    @field_validator("deadline", "created_at")
    @classmethod
    def utc_timestamps(cls, v: datetime) -> datetime:
        return as_utc(v)


class TaskResponse(BaseModel):
    success: bool = True
    message: TaskRead
