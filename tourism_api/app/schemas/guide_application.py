"""
Pydantic models for guide applications.

An application only ever exists in the ``pending`` state: accepting or
rejecting it deletes the document.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class GuideApplicationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    title: str = Field(..., min_length=1, examples=["Hill tracts specialist"])
    reason: str = Field(..., min_length=1)
    cv_link: str = Field(..., min_length=1, examples=["https://example.com/cv.pdf"])


class GuideApplicationRead(GuideApplicationCreate):
    id: str
    status: str = "pending"
    applied_at: datetime | None = None
