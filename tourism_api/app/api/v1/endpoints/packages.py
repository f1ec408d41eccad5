"""
Package catalog endpoints for API v1.

Reading the catalog is public; adding a package requires an
administrator.  Image fields carry references returned by
``POST /uploads``.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from tourism_api.app.core.db import get_database
from tourism_api.app.core.errors import InvalidIdError, NotFoundError
from tourism_api.app.core.security import require_roles
from tourism_api.app.schemas.package import PackageCreate, PackageRead
from tourism_api.app.schemas.user import Role
from tourism_api.app.services.package_service import PackageService


router = APIRouter()


@router.get("/", response_model=List[PackageRead])
async def list_packages(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[PackageRead]:
    return await PackageService(db).list_packages()


@router.get("/random", response_model=List[PackageRead])
async def random_packages(
    size: int = Query(3, ge=1, le=50, description="Maximum number of packages"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[PackageRead]:
    """Up to ``size`` distinct packages picked at random."""
    return await PackageService(db).sample_packages(size)


@router.get("/{package_id}", response_model=PackageRead)
async def get_package(
    package_id: str = Path(..., description="ID of the package"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PackageRead:
    try:
        return await PackageService(db).get_package(package_id)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_package(
    package: PackageCreate,
    current_user: dict = Depends(require_roles(Role.ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> dict:
    package_id = await PackageService(db).create_package(package)
    return {"message": "Package added successfully", "package_id": package_id}
