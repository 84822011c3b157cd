"""Pydantic schemas for login record operations."""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

# JSON numbers are accepted for contact fields and stored as text.
ContactValue = Union[StrictStr, StrictInt, StrictFloat]


class LoginCreate(BaseModel):
    """Payload posted by the login page.

    Presence of ``email`` and ``phone`` is checked by the store so a missing
    field answers 400 rather than a schema error. Their format is not checked.
    """

    email: Optional[ContactValue] = None
    phone: Optional[ContactValue] = None
    user_agent: Optional[str] = Field(default=None, alias="userAgent")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LoginOut(BaseModel):
    """Schema for returning a stored login record."""

    id: int
    email: str
    phone: str
    timestamp: str
    user_agent: Optional[str] = Field(default=None, alias="userAgent")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class LoginCreated(BaseModel):
    message: str
    id: int


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str


__all__ = ["ErrorOut", "LoginCreate", "LoginCreated", "LoginOut", "MessageOut"]
