"""
Guide application endpoints for API v1.

Any visitor may apply; listing, accepting and rejecting applications
is reserved for administrators.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.core.errors import ConflictError, InvalidIdError, NotFoundError, RoleUpdateConflictError
from tourism_api.app.core.security import require_roles
from tourism_api.app.schemas.guide_application import GuideApplicationCreate, GuideApplicationRead
from tourism_api.app.schemas.user import Role
from tourism_api.app.services.guide_application_service import GuideApplicationService


router = APIRouter()


@router.get("/", response_model=List[GuideApplicationRead])
async def list_applications(
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[GuideApplicationRead]:
    return await GuideApplicationService(db).list_applications()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def submit_application(
    application: GuideApplicationCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    """Submit a guide application.

    Returns 409 if the applicant already has a pending application.
    """
    try:
        application_id = await GuideApplicationService(db).submit(application)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"message": "Application Submitted Successfully", "application_id": application_id}


@router.put("/accept/{application_id}")
async def accept_application(
    application_id: str = Path(..., description="ID of the application"),
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    """Promote the applicant to tour guide and remove the application.

    404 if the application does not exist; 409 if no user matches the
    applicant e‑mail (the application is kept in that case).
    """
    try:
        await GuideApplicationService(db).accept(application_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RoleUpdateConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"message": "application accepted and role updated to tour-guide"}


@router.delete("/reject/{application_id}")
async def reject_application(
    application_id: str = Path(..., description="ID of the application"),
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    try:
        await GuideApplicationService(db).reject(application_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Application deleted and rejected successfully"}
