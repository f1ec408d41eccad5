"""
Pydantic models for tour bookings.

A booking is a tourist's reservation of a package.  Package, tourist
and guide details are copied into the booking when it is created;
they are snapshots, not live references.  The ``status`` field follows
``pending → In Review → Accepted | Rejected``.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    IN_REVIEW = "In Review"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class BookingCreate(BaseModel):
    """Schema for creating a booking."""

    package_id: Optional[str] = None
    package_name: str = Field(..., min_length=1, examples=["Sundarbans Adventure"])
    tourist_name: str = Field(..., min_length=1)
    tourist_email: str = Field(..., min_length=3)
    tourist_image: Optional[str] = None
    price: float = Field(..., ge=0, allow_inf_nan=False, examples=[250.0])
    tour_date: datetime
    guide_name: Optional[str] = None
    guide_email: Optional[str] = None


class PaymentRecord(BaseModel):
    """Body of ``PATCH /bookings/{id}/payment``."""

    transaction_id: str = Field(..., min_length=1, examples=["pi_3PXYZ"])


class BookingRead(BookingCreate):
    id: str
    status: BookingStatus = BookingStatus.PENDING
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
