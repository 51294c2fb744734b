"""Pydantic schemas for registration and login."""

import uuid

from pydantic import BaseModel, Field

from todolist.schemas.common import READ_CONFIG


class AuthRequest(BaseModel):
    login: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=3, max_length=255)


class UserRead(BaseModel):
    """Public user fields. The password hash is never serialized."""
    id: uuid.UUID
    login: str

    model_config = READ_CONFIG


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserRead


class UserResponse(BaseModel):
    success: bool = True
    message: UserRead
