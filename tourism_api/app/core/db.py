"""
MongoDB integration.

This module owns the process‑wide ``AsyncIOMotorClient`` and exposes
the database handle to request handlers through the ``get_database``
dependency.  Services never import the client directly; they receive
the database in their constructor, so tests can substitute an
in‑memory database via ``app.dependency_overrides``.

``init_db`` is executed on application start and creates the indexes
the API relies on (most importantly the unique e‑mail index on
``users``).
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from .config import settings
from .errors import InvalidIdError


logger = logging.getLogger(__name__)

USERS = "users"
PACKAGES = "packages"
GUIDE_APPLICATIONS = "guideApplications"
BOOKINGS = "bookings"
STORIES = "stories"

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Return the shared Mongo client, creating it on first use."""
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.mongodb_uri)
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the application database."""
    return get_client()[settings.mongodb_database]


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


async def init_db(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes used by the services.

    ``create_index`` is idempotent, so this is safe to run on every
    start.
    """
    await db[USERS].create_index("email", unique=True)
    await db[USERS].create_index("role")
    await db[GUIDE_APPLICATIONS].create_index([("email", 1), ("status", 1)])
    await db[BOOKINGS].create_index("tourist_email")
    await db[BOOKINGS].create_index("guide_email")
    await db[STORIES].create_index("author_email")
    logger.info("Indexes ensured on database %s", db.name)


def parse_object_id(value: str) -> ObjectId:
    """Convert a 24‑hex string into an ``ObjectId``.

    Only the canonical lower‑case form is accepted, so an id always
    round‑trips to the same string.
    """
    try:
        oid = ObjectId(value)
    except (InvalidId, TypeError):
        raise InvalidIdError(value)
    if str(oid) != value:
        raise InvalidIdError(value)
    return oid


async def sample_documents(
    collection: AsyncIOMotorCollection,
    size: int,
    query: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Return up to ``size`` distinct random documents from ``collection``.

    ``$sample`` may yield the same document twice when it falls back to
    a pseudo‑random cursor, so results are de‑duplicated by ``_id``.
    """
    pipeline: List[Dict[str, Any]] = []
    if query:
        pipeline.append({"$match": query})
    pipeline.append({"$sample": {"size": size}})
    seen = set()
    documents = []
    for document in await collection.aggregate(pipeline).to_list(length=None):
        if document["_id"] in seen:
            continue
        seen.add(document["_id"])
        documents.append(document)
    return documents


def document_to_dict(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a stored document with ``_id`` exposed as ``id``."""
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return data
