"""
Booking endpoints for API v1.

Every booking route needs a token.  Tourists create, pay for, list and
cancel their own bookings; the guide named on a booking (or an
administrator) accepts or rejects it once it is ``In Review``.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.core.errors import InvalidIdError, InvalidTransitionError, NotFoundError
from tourism_api.app.core.security import get_current_user, require_roles, require_self
from tourism_api.app.schemas.booking import BookingCreate, BookingRead, PaymentRecord
from tourism_api.app.schemas.user import Role
from tourism_api.app.services.booking_service import BookingService


router = APIRouter()


async def _load_booking(service: BookingService, booking_id: str) -> BookingRead:
    try:
        return await service.get_booking(booking_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/bookings", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking: BookingCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BookingRead:
    """Book a package for the caller.  The booking starts as ``pending``."""
    require_self(booking.tourist_email, current_user)
    return await BookingService(db).create_booking(booking)


@router.get("/bookings", response_model=List[BookingRead])
async def list_tourist_bookings(
    email: str = Query(..., description="Tourist e-mail; must be the caller's"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[BookingRead]:
    require_self(email, current_user)
    return await BookingService(db).list_by_tourist(email)


@router.get("/bookings/guide/{email}", response_model=List[BookingRead])
async def list_guide_bookings(
    email: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[BookingRead]:
    """Bookings assigned to the calling guide."""
    require_self(email, current_user)
    return await BookingService(db).list_by_guide(email)


@router.get("/bookings/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BookingRead:
    booking = await _load_booking(BookingService(db), booking_id)
    if current_user.get("sub") not in (booking.tourist_email, booking.guide_email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden access")
    return booking


@router.patch("/bookings/{booking_id}/payment", response_model=BookingRead)
async def record_payment(
    body: PaymentRecord,
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BookingRead:
    """Record the provider transaction id; the booking moves to ``In Review``."""
    service = BookingService(db)
    booking = await _load_booking(service, booking_id)
    require_self(booking.tourist_email, current_user)
    try:
        return await service.record_payment(booking_id, body.transaction_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


async def _decide(booking_id: str, current_user: dict, db: AsyncIOMotorDatabase, accept: bool) -> BookingRead:
    service = BookingService(db)
    booking = await _load_booking(service, booking_id)
    if current_user["role"] != Role.ADMIN and booking.guide_email != current_user.get("sub"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden access")
    try:
        if accept:
            return await service.accept_tour(booking_id)
        return await service.reject_tour(booking_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put("/bookings/accept/{booking_id}", response_model=BookingRead)
async def accept_tour(
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(require_roles(Role.TOUR_GUIDE, Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BookingRead:
    """Accept a paid booking.  Only succeeds while the booking is ``In Review``."""
    return await _decide(booking_id, current_user, db, accept=True)


@router.put("/bookings/reject/{booking_id}", response_model=BookingRead)
async def reject_tour(
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(require_roles(Role.TOUR_GUIDE, Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> BookingRead:
    """Reject a paid booking.  Only succeeds while the booking is ``In Review``."""
    return await _decide(booking_id, current_user, db, accept=False)


@router.delete("/bookings/{booking_id}")
async def cancel_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    """Cancel (delete) one of the caller's bookings, whatever its status."""
    service = BookingService(db)
    booking = await _load_booking(service, booking_id)
    require_self(booking.tourist_email, current_user)
    try:
        await service.cancel_booking(booking_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Booking cancelled successfully"}
