"""Pydantic schemas for lists and subscriptions."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from todolist.schemas.common import CAMEL_CONFIG, READ_CONFIG, as_utc
from todolist.schemas.task import TaskRead


class ListCreate(BaseModel):
    title: str = Field(..., min_length=3, max_length=255)


class ListUpdate(BaseModel):
    id: uuid.UUID
    title: str = Field(..., min_length=3, max_length=255)


class ListDelete(BaseModel):
    id: uuid.UUID


class ListSubscribe(BaseModel):
    """Add user_id to the subscribers of list_id."""
    user_id: uuid.UUID
    list_id: uuid.UUID

    model_config = CAMEL_CONFIG


class ListRead(BaseModel):
    id: uuid.UUID
    title: str
    author_id: uuid.UUID
    subscribers: list[uuid.UUID]
    tasks: list[TaskRead]
    created_at: datetime

    model_config = READ_CONFIG

    @field_validator("subscribers", mode="before")
    @classmethod
    def subscriber_ids(cls, v):
        # ORM rows carry User objects; the API exposes their ids
        return [getattr(u, "id", u) for u in v]

    @field_validator("created_at")
    @classmethod
    def utc_created_at(cls, v: datetime) -> datetime:
        return as_utc(v)


class ListResponse(BaseModel):
    success: bool = True
    message: ListRead


class ListsResponse(BaseModel):
    success: bool = True
    message: list[ListRead]
