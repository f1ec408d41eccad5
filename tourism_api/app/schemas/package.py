"""
Pydantic models for tour packages.

Packages are created once by an administrator and read by everyone.
Images are references previously returned by ``POST /uploads`` (or any
external URL).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class TourPlanDay(BaseModel):
    day: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None


class PackageCreate(BaseModel):
    title: str = Field(..., min_length=1, examples=["Cox's Bazar Beach Escape"])
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    tour_plan: List[TourPlanDay] = Field(..., min_length=1)
    tour_type: Optional[str] = Field(None, examples=["beach"])
    cover_image: str = Field(..., min_length=1)
    gallery_images: List[str] = Field(default_factory=list, max_length=10)


class PackageRead(PackageCreate):
    id: str
    created_at: Optional[datetime] = None
