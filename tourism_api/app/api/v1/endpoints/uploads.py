"""
Image upload endpoint for API v1.

Clients upload images here first and then send the returned references
as plain strings in package and story payloads.
"""

from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from tourism_api.app.core.security import get_current_user
from tourism_api.app.core.storage import FileStorage, get_storage


router = APIRouter()

MAX_FILES = 10


@router.post("/uploads", status_code=status.HTTP_201_CREATED)
async def upload_images(
    files: List[UploadFile] = File(..., description="Images to store"),
    current_user: dict = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
) -> dict:
    if len(files) > MAX_FILES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"at most {MAX_FILES} files per request",
        )
    return {"references": [storage.store(upload) for upload in files]}
