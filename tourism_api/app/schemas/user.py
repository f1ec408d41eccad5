"""
Pydantic models for user data.

Defines the closed set of roles, the payloads for registering and
updating users and the read model returned by the API.  A user's role
is never accepted from a registration or profile payload: it changes
only through admin promotion or an accepted guide application.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    TOURIST = "tourist"
    TOUR_GUIDE = "tour-guide"
    ADMIN = "admin"


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Rahim Uddin"])
    email: str = Field(..., min_length=3, examples=["rahim@example.com"])
    photo: Optional[str] = Field(None, examples=["https://example.com/rahim.jpg"])


class UserCreate(UserBase):
    """Schema for registering a user."""
    pass


class UserUpdate(BaseModel):
    """Partial profile update.

    Only the fields present in the request body are written; e‑mail
    and role are not editable through this model.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    photo: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    address: Optional[str] = Field(default=None, max_length=200)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: Optional[str]) -> str:
        # Omit the field to keep the current name; null would blank it.
        if value is None:
            raise ValueError("name cannot be null")
        return value


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Role = Role.TOURIST
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserPage(BaseModel):
    """Search result: always a list plus the number of matches."""

    items: List[UserRead]
    total: int


class TokenRequest(BaseModel):
    email: str = Field(..., min_length=3)
