"""
Business logic for bookings.

The ``BookingService`` tracks a tourist's purchase of a package
through payment and the guide's decision::

    pending --record_payment--> In Review --accept_tour--> Accepted
                                          \\--reject_tour--> Rejected

Every transition is a single conditional ``update_one`` whose filter
includes the expected current status, so two concurrent requests can
never both move the same booking.  When the conditional update matches
nothing, the booking is re‑read to tell "does not exist" apart from
"exists in another status".  Cancellation deletes the booking
regardless of its status.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.db import BOOKINGS, document_to_dict, parse_object_id
from ..core.errors import InvalidTransitionError, NotFoundError
from ..schemas.booking import BookingCreate, BookingRead, BookingStatus


logger = logging.getLogger(__name__)


class BookingService:
    """Service for the ``bookings`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[BOOKINGS]

    async def create_booking(self, data: BookingCreate) -> BookingRead:
        """Insert a booking with status ``pending``."""
        document: Dict[str, Any] = {
            **data.model_dump(),
            "status": BookingStatus.PENDING.value,
            "transaction_id": None,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(
            "Booking %s created for %s (%s)", result.inserted_id, data.tourist_email, data.package_name
        )
        return BookingRead(**document_to_dict(document))

    async def get_booking(self, booking_id: str) -> BookingRead:
        document = await self.collection.find_one({"_id": parse_object_id(booking_id)})
        if not document:
            raise NotFoundError("booking not found")
        return BookingRead(**document_to_dict(document))

    async def list_by_tourist(self, email: str) -> List[BookingRead]:
        documents = await self.collection.find({"tourist_email": email}).sort("created_at", -1).to_list(length=None)
        return [BookingRead(**document_to_dict(doc)) for doc in documents]

    async def list_by_guide(self, email: str) -> List[BookingRead]:
        documents = await self.collection.find({"guide_email": email}).sort("tour_date", 1).to_list(length=None)
        return [BookingRead(**document_to_dict(doc)) for doc in documents]

    async def record_payment(self, booking_id: str, transaction_id: str) -> BookingRead:
        """Store the provider transaction id and move the booking to ``In Review``.

        Only a ``pending`` booking can be paid.  ``transaction_id`` is
        written in the same update that changes the status, so it is
        never set on a booking outside ``In Review`` or later states.
        """
        return await self._transition(
            booking_id,
            BookingStatus.PENDING,
            BookingStatus.IN_REVIEW,
            {"paid_at": datetime.now(timezone.utc), "transaction_id": transaction_id},
        )

    async def accept_tour(self, booking_id: str) -> BookingRead:
        return await self._transition(
            booking_id,
            BookingStatus.IN_REVIEW,
            BookingStatus.ACCEPTED,
            {"accepted_at": datetime.now(timezone.utc)},
        )

    async def reject_tour(self, booking_id: str) -> BookingRead:
        return await self._transition(
            booking_id,
            BookingStatus.IN_REVIEW,
            BookingStatus.REJECTED,
            {"rejected_at": datetime.now(timezone.utc)},
        )

    async def cancel_booking(self, booking_id: str) -> None:
        """Delete the booking whatever its status."""
        result = await self.collection.delete_one({"_id": parse_object_id(booking_id)})
        if result.deleted_count == 0:
            raise NotFoundError("booking not found")
        logger.info("Booking %s cancelled", booking_id)

    async def _transition(
        self,
        booking_id: str,
        expected: BookingStatus,
        target: BookingStatus,
        extra: Dict[str, Any],
    ) -> BookingRead:
        oid = parse_object_id(booking_id)
        result = await self.collection.update_one(
            {"_id": oid, "status": expected.value},
            {"$set": {"status": target.value, **extra}},
        )
        document = await self.collection.find_one({"_id": oid})
        if not document:
            raise NotFoundError("booking not found")
        if result.matched_count == 0:
            logger.warning(
                "Booking %s cannot move to %s from %s", booking_id, target.value, document.get("status")
            )
            raise InvalidTransitionError(f"booking is {document.get('status')}, expected {expected.value}")
        logger.info("Booking %s moved from %s to %s", booking_id, expected.value, target.value)
        return BookingRead(**document_to_dict(document))
