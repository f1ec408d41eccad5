"""
Business logic for the package catalog.
"""

import logging
from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.db import PACKAGES, document_to_dict, parse_object_id, sample_documents
from ..core.errors import NotFoundError
from ..schemas.package import PackageCreate, PackageRead


logger = logging.getLogger(__name__)


class PackageService:
    """Read‑mostly access to the ``packages`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[PACKAGES]

    async def list_packages(self) -> List[PackageRead]:
        documents = await self.collection.find().sort("created_at", -1).to_list(length=None)
        return [PackageRead(**document_to_dict(doc)) for doc in documents]

    async def get_package(self, package_id: str) -> PackageRead:
        document = await self.collection.find_one({"_id": parse_object_id(package_id)})
        if not document:
            raise NotFoundError("package not found")
        return PackageRead(**document_to_dict(document))

    async def sample_packages(self, size: int) -> List[PackageRead]:
        documents = await sample_documents(self.collection, size)
        return [PackageRead(**document_to_dict(doc)) for doc in documents]

    async def create_package(self, data: PackageCreate) -> str:
        document = {**data.model_dump(), "created_at": datetime.now(timezone.utc)}
        result = await self.collection.insert_one(document)
        logger.info("Package %s added: %s", result.inserted_id, data.title)
        return str(result.inserted_id)
