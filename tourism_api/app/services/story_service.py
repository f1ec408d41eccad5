"""
Business logic for travel stories.

Stories carry an ordered list of image references that can be grown
and pruned after creation.  ``patch_story`` applies the two image
changes as separate updates (Mongo rejects ``$push`` and ``$pull`` on
the same field in one update).  Adding and removing the same reference
in one request is a no-op on the images.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.db import STORIES, document_to_dict, parse_object_id, sample_documents
from ..core.errors import NotFoundError
from ..schemas.story import StoryCreate, StoryPatch, StoryRead


logger = logging.getLogger(__name__)


class StoryService:
    """Service for the ``stories`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[STORIES]

    async def list_stories(self, author_email: Optional[str] = None) -> List[StoryRead]:
        query = {"author_email": author_email} if author_email else {}
        documents = await self.collection.find(query).sort("created_at", -1).to_list(length=None)
        return [StoryRead(**document_to_dict(doc)) for doc in documents]

    async def sample_stories(self, size: int) -> List[StoryRead]:
        documents = await sample_documents(self.collection, size)
        return [StoryRead(**document_to_dict(doc)) for doc in documents]

    async def get_story(self, story_id: str) -> StoryRead:
        document = await self.collection.find_one({"_id": parse_object_id(story_id)})
        if not document:
            raise NotFoundError("Story not found")
        return StoryRead(**document_to_dict(document))

    async def create_story(self, data: StoryCreate) -> str:
        document = {**data.model_dump(), "created_at": datetime.now(timezone.utc)}
        result = await self.collection.insert_one(document)
        logger.info("Story %s added by %s", result.inserted_id, data.author_email)
        return str(result.inserted_id)

    async def delete_story(self, story_id: str) -> None:
        result = await self.collection.delete_one({"_id": parse_object_id(story_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Story not found")

    async def patch_story(self, story_id: str, patch: StoryPatch) -> StoryRead:
        """Apply image changes and stamp ``last_updated``.

        ``remove_image`` cancels a matching entry in ``add_images``
        instead of pulling it from the stored list, so adding and
        removing the same reference leaves the images as they were.
        Otherwise every stored occurrence of ``remove_image`` is pulled.
        """
        oid = parse_object_id(story_id)
        added = patch.add_images or []
        additions = [image for image in added if image != patch.remove_image]
        update: Dict[str, Any] = {"$set": {"last_updated": datetime.now(timezone.utc)}}
        if additions:
            update["$push"] = {"images": {"$each": additions}}
        result = await self.collection.update_one({"_id": oid}, update)
        if result.matched_count == 0:
            raise NotFoundError("Story not found")
        if patch.remove_image and patch.remove_image not in added:
            await self.collection.update_one({"_id": oid}, {"$pull": {"images": patch.remove_image}})
        return await self.get_story(story_id)
