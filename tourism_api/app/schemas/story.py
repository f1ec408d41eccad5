"""
Pydantic models for travel stories.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class StoryCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    author_email: str = Field(..., min_length=3)
    images: List[str] = Field(..., min_length=1, max_length=5)


class StoryPatch(BaseModel):
    """Image changes for an existing story.

    ``add_images`` is appended and every occurrence of ``remove_image``
    is removed.  A reference that appears in both cancels out and the
    stored images keep their content.  An empty body only refreshes
    ``last_updated``.
    """

    add_images: Optional[List[str]] = None
    remove_image: Optional[str] = None


class StoryRead(StoryCreate):
    id: str
    # Patches may grow the list past five or empty it.
    images: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None
