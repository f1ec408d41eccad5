"""
Guide application workflow.

A tourist applies to become a tour guide; an administrator accepts or
rejects the application.  Applications only exist while pending:
both decisions delete the document, so there is no history of past
decisions.

Acceptance touches two collections without a transaction.  The role
update runs first and the application is deleted only when it matched
a user, so a failure never leaves a deleted application without a
promoted user.  A crash between the two writes leaves the application
pending with the role already updated; accepting it again is harmless.
"""

import logging
from datetime import datetime, timezone
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.db import GUIDE_APPLICATIONS, USERS, document_to_dict, parse_object_id
from ..core.errors import ConflictError, NotFoundError, RoleUpdateConflictError
from ..schemas.guide_application import GuideApplicationCreate, GuideApplicationRead
from ..schemas.user import Role


logger = logging.getLogger(__name__)

PENDING = "pending"


class GuideApplicationService:
    """Service for the ``guideApplications`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.applications = db[GUIDE_APPLICATIONS]
        self.users = db[USERS]

    async def submit(self, data: GuideApplicationCreate) -> str:
        """Create a pending application and return its id.

        Raises ``ConflictError`` if the applicant e‑mail already has a
        pending application.
        """
        existing = await self.applications.find_one({"email": data.email, "status": PENDING}, {"_id": 1})
        if existing:
            logger.warning("Duplicate guide application from %s", data.email)
            raise ConflictError("You have already applied to become a tour guide")
        document = {
            **data.model_dump(),
            "status": PENDING,
            "applied_at": datetime.now(timezone.utc),
        }
        result = await self.applications.insert_one(document)
        logger.info("Guide application %s submitted by %s", result.inserted_id, data.email)
        return str(result.inserted_id)

    async def list_applications(self) -> List[GuideApplicationRead]:
        documents = await self.applications.find().sort("applied_at", 1).to_list(length=None)
        return [GuideApplicationRead(**document_to_dict(doc)) for doc in documents]

    async def accept(self, application_id: str) -> None:
        """Promote the applicant to tour guide and consume the application.

        The user is matched by the e‑mail stored on the application.  If
        no user has that e‑mail, ``RoleUpdateConflictError`` is raised
        and the application is left in place.
        """
        oid = parse_object_id(application_id)
        application = await self.applications.find_one({"_id": oid})
        if not application:
            raise NotFoundError("application not found")
        result = await self.users.update_one(
            {"email": application["email"]},
            {"$set": {"role": Role.TOUR_GUIDE.value, "updated_at": datetime.now(timezone.utc)}},
        )
        if result.matched_count == 0:
            logger.warning(
                "Guide application %s not accepted: no user with e-mail %s",
                application_id,
                application["email"],
            )
            raise RoleUpdateConflictError("no user matches the applicant e-mail; role not updated")
        await self.applications.delete_one({"_id": oid})
        logger.info("Guide application %s accepted, %s is now a tour guide", application_id, application["email"])

    async def reject(self, application_id: str) -> None:
        """Delete the application.  Raises ``NotFoundError`` if absent."""
        result = await self.applications.delete_one({"_id": parse_object_id(application_id)})
        if result.deleted_count == 0:
            raise NotFoundError("application not found")
        logger.info("Guide application %s rejected", application_id)
