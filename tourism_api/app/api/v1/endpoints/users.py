"""
User endpoints for API v1.

Registration is public and always creates a tourist.  Searching users
and promoting them to admin are restricted to administrators; the
admin and role checks are self‑scoped (a user may only ask about their
own e‑mail).  ``GET /users/{id}`` is the public guide profile lookup.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.core.errors import AlreadyExistsError, InvalidIdError, NotFoundError
from tourism_api.app.core.security import get_current_user, require_roles, require_self
from tourism_api.app.schemas.user import Role, UserCreate, UserPage, UserRead, UserUpdate
from tourism_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/", response_model=UserPage)
async def find_users(
    name: Optional[str] = Query(None, description="Case-insensitive part of the name"),
    email: Optional[str] = Query(None, description="Case-insensitive part of the e-mail"),
    role: Optional[Role] = Query(None),
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserPage:
    """Search users.  Always returns ``{"items": [...], "total": n}``."""
    return await UserService(db).find_users(name=name, email=email, role=role)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: UserCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserRead:
    """Register a tourist.  A second call with the same e‑mail returns 409."""
    try:
        return await UserService(db).register_user(user)
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/admin/{email}")
async def check_admin(
    email: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    require_self(email, current_user)
    return {"admin": await UserService(db).is_admin(email)}


@router.patch("/admin/{user_id}", response_model=UserRead)
async def promote_to_admin(
    user_id: str = Path(..., description="ID of the user to promote"),
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserRead:
    try:
        return await UserService(db).promote_to_admin(user_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/role/{email}")
async def get_role(
    email: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    require_self(email, current_user)
    try:
        role = await UserService(db).get_role(email)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"role": role.value}


@router.get("/{guide_id}", response_model=UserRead)
async def get_guide(
    guide_id: str = Path(..., description="ID of the tour guide"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserRead:
    """Return a tour guide's profile.

    A malformed id yields 400; an unknown id or a user who is not a
    guide yields 404.
    """
    try:
        return await UserService(db).get_guide_by_id(guide_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{user_id}", response_model=UserRead)
async def update_profile(
    updates: UserUpdate,
    user_id: str = Path(..., description="ID of the user"),
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserRead:
    """Update the caller's own profile (administrators may update anyone)."""
    service = UserService(db)
    try:
        target = await service.get_by_id(user_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if target.email != current_user.get("sub") and not await service.is_admin(current_user.get("sub")):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden access")
    try:
        return await service.update_profile(user_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
