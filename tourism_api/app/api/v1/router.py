"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers (users, guides, packages,
stories, bookings, etc.) under a unified prefix.  When new resources
are introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import (
    auth,
    users,
    guides,
    guide_applications,
    packages,
    stories,
    bookings,
    payments,
    statistics,
    uploads,
)

router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(guides.router, prefix="/guides", tags=["guides"])
# The camel‑case prefix is what the existing frontend calls.
router.include_router(guide_applications.router, prefix="/guideApplications", tags=["guide applications"])
router.include_router(packages.router, prefix="/packages", tags=["packages"])
router.include_router(stories.router, prefix="/stories", tags=["stories"])
# The routers below define their full paths internally.
router.include_router(bookings.router, tags=["bookings"])
router.include_router(payments.router, tags=["payments"])
router.include_router(statistics.router, tags=["statistics"])
router.include_router(uploads.router, tags=["uploads"])
