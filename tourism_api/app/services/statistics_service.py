"""
Service layer for the admin dashboard figures.

All queries are read‑only.  ``total_payment`` sums the price of every
booking regardless of status, matching what the dashboard has always
shown; it is a booked‑value figure, not settled revenue.
"""

from __future__ import annotations

from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.db import BOOKINGS, PACKAGES, STORIES, USERS
from ..schemas.user import Role


class StatisticsService:
    """Aggregated counts for administrators."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def overview(self) -> Dict[str, Any]:
        totals = await self.db[BOOKINGS].aggregate(
            [{"$group": {"_id": None, "total": {"$sum": "$price"}}}]
        ).to_list(length=None)
        total_payment = totals[0]["total"] if totals else 0
        return {
            "total_payment": total_payment,
            "total_guides": await self.db[USERS].count_documents({"role": Role.TOUR_GUIDE.value}),
            "total_packages": await self.db[PACKAGES].count_documents({}),
            "total_tourists": await self.db[USERS].count_documents({"role": Role.TOURIST.value}),
            "total_stories": await self.db[STORIES].count_documents({}),
        }
