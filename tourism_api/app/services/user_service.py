"""
Business logic for users and roles.

``UserService`` is the identity and role store: registration,
profile updates, role lookups, admin promotion and the guide queries.
Users are keyed by e‑mail; the unique index created in ``core.db``
backs the duplicate check in ``register_user`` against concurrent
registrations.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..core.db import USERS, document_to_dict, parse_object_id, sample_documents
from ..core.errors import AlreadyExistsError, NotFoundError
from ..schemas.user import Role, UserCreate, UserPage, UserRead, UserUpdate


logger = logging.getLogger(__name__)


class UserService:
    """Service for user records stored in the ``users`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[USERS]

    async def find_users(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> UserPage:
        """Search users.

        ``name`` and ``email`` match case‑insensitive substrings (the
        input is escaped, so it is never interpreted as a pattern);
        ``role`` must match exactly.  With no filter every user is
        returned.
        """
        query: Dict[str, Any] = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if email:
            query["email"] = {"$regex": re.escape(email), "$options": "i"}
        if role:
            query["role"] = role.value
        documents = await self.collection.find(query).to_list(length=None)
        items = [UserRead(**document_to_dict(doc)) for doc in documents]
        return UserPage(items=items, total=len(items))

    async def register_user(self, data: UserCreate, role: Role = Role.TOURIST) -> UserRead:
        """Create a user unless the e‑mail is already registered.

        An existing record is never modified; the caller receives
        ``AlreadyExistsError`` instead.
        """
        if await self.collection.find_one({"email": data.email}, {"_id": 1}):
            raise AlreadyExistsError("user already exists")
        now = datetime.now(timezone.utc)
        document = {
            "name": data.name,
            "email": data.email,
            "photo": data.photo,
            "role": role.value,
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            # Lost a race against a concurrent registration.
            raise AlreadyExistsError("user already exists")
        document["_id"] = result.inserted_id
        logger.info("Registered user %s as %s", data.email, role.value)
        return UserRead(**document_to_dict(document))

    async def get_by_email(self, email: str) -> Optional[UserRead]:
        document = await self.collection.find_one({"email": email})
        return UserRead(**document_to_dict(document)) if document else None

    async def get_role(self, email: str) -> Role:
        user = await self.get_by_email(email)
        if not user:
            raise NotFoundError("user not found")
        return user.role

    async def is_admin(self, email: str) -> bool:
        user = await self.get_by_email(email)
        return bool(user and user.role == Role.ADMIN)

    async def promote_to_admin(self, user_id: str) -> UserRead:
        """Unconditionally set the user's role to ``admin``."""
        document = await self.collection.find_one_and_update(
            {"_id": parse_object_id(user_id)},
            {"$set": {"role": Role.ADMIN.value, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        if not document:
            raise NotFoundError("user not found")
        logger.info("Promoted user %s to admin", document["email"])
        return UserRead(**document_to_dict(document))

    async def update_profile(self, user_id: str, updates: UserUpdate) -> UserRead:
        """Patch the provided profile fields and stamp ``updated_at``."""
        changes = updates.model_dump(exclude_unset=True)
        changes["updated_at"] = datetime.now(timezone.utc)
        document = await self.collection.find_one_and_update(
            {"_id": parse_object_id(user_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not document:
            raise NotFoundError("user not found")
        return UserRead(**document_to_dict(document))

    async def get_by_id(self, user_id: str) -> UserRead:
        document = await self.collection.find_one({"_id": parse_object_id(user_id)})
        if not document:
            raise NotFoundError("user not found")
        return UserRead(**document_to_dict(document))

    async def get_guide_by_id(self, guide_id: str) -> UserRead:
        """Look up a tour guide.

        A malformed id raises ``InvalidIdError`` before the store is
        queried; a user who exists but is not a guide is reported as
        not found.
        """
        oid = parse_object_id(guide_id)
        document = await self.collection.find_one({"_id": oid, "role": Role.TOUR_GUIDE.value})
        if not document:
            raise NotFoundError("guide not found")
        return UserRead(**document_to_dict(document))

    async def list_guides(self) -> List[UserRead]:
        documents = await self.collection.find({"role": Role.TOUR_GUIDE.value}).to_list(length=None)
        return [UserRead(**document_to_dict(doc)) for doc in documents]

    async def sample_guides(self, size: int) -> List[UserRead]:
        documents = await sample_documents(self.collection, size, {"role": Role.TOUR_GUIDE.value})
        return [UserRead(**document_to_dict(doc)) for doc in documents]
