"""
Admin dashboard statistics for API v1.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.core.security import require_roles
from tourism_api.app.schemas.user import Role
from tourism_api.app.services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/admin-stats", response_model=Dict[str, Any])
async def admin_stats(
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    """Booked value and record counts.  Administrators only."""
    return await StatisticsService(db).overview()
