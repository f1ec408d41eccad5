"""
Story gallery endpoints for API v1.

Stories are public to read.  Writing requires a token, and only the
author may add, change or delete a story.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.core.errors import InvalidIdError, NotFoundError
from tourism_api.app.core.security import get_current_user, require_self
from tourism_api.app.schemas.story import StoryCreate, StoryPatch, StoryRead
from tourism_api.app.services.story_service import StoryService


router = APIRouter()


async def _load_own_story(service: StoryService, story_id: str, current_user: dict) -> StoryRead:
    try:
        story = await service.get_story(story_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    require_self(story.author_email, current_user)
    return story


@router.get("/", response_model=List[StoryRead])
async def list_stories(
    email: Optional[str] = Query(None, description="Only stories written by this e-mail"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[StoryRead]:
    return await StoryService(db).list_stories(author_email=email)


@router.get("/random", response_model=List[StoryRead])
async def random_stories(
    size: int = Query(3, ge=1, le=50),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[StoryRead]:
    return await StoryService(db).sample_stories(size)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_story(
    story: StoryCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    require_self(story.author_email, current_user)
    story_id = await StoryService(db).create_story(story)
    return {"message": "Story added successfully", "story_id": story_id}


@router.delete("/{story_id}")
async def delete_story(
    story_id: str = Path(..., description="ID of the story"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    service = StoryService(db)
    await _load_own_story(service, story_id, current_user)
    try:
        await service.delete_story(story_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Story deleted successfully"}


@router.patch("/{story_id}", response_model=StoryRead)
async def patch_story(
    patch: StoryPatch,
    story_id: str = Path(..., description="ID of the story"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> StoryRead:
    """Add and/or remove images.  ``last_updated`` is refreshed in every case."""
    service = StoryService(db)
    await _load_own_story(service, story_id, current_user)
    try:
        return await service.patch_story(story_id, patch)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
