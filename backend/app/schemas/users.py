from __future__ import annotations

import uuid
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class CreateUserRequest(BaseModel):
    name: str
    email: str


class UpdateUserRequest(BaseModel):
    """Partial update: fields left out keep their stored value."""

    name: str | None = None
    email: str | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used for every JSON response.

    `data` is dropped from the payload (rather than sent as null) when there is
    nothing to return; endpoints render with `response_model_exclude_none`.
    """

    success: bool
    message: str
    data: T | None = None

    @classmethod
    def ok(cls, message: str, data: T | None = None) -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)
