"""
Public guide listings.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.schemas.user import UserRead
from tourism_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/", response_model=List[UserRead])
async def list_guides(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[UserRead]:
    return await UserService(db).list_guides()


@router.get("/random", response_model=List[UserRead])
async def random_guides(
    size: int = Query(3, ge=1, le=50),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[UserRead]:
    return await UserService(db).sample_guides(size)
