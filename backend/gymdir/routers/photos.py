"""
Photo API endpoints.

Uploaded photos are referenced from gyms and reviews by the returned url.
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import FileResponse

from gymdir.auth.dependencies import get_current_user
from gymdir.dependencies import get_photo_service
from gymdir.domain.entities import User
from gymdir.schemas.common import ERROR_RESPONSES
from gymdir.schemas.photo import PhotoDto
from gymdir.services.photo_service import PhotoService

router = APIRouter(responses=ERROR_RESPONSES)


@router.post("", response_model=PhotoDto)
async def upload_photo(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    photo_service: PhotoService = Depends(get_photo_service),
):
    """
    Upload a photo (multipart field `file`).
    """
    data = await file.read()
    photo = photo_service.upload(data, file.filename)
    return PhotoDto.model_validate(photo.model_dump())


@router.get("/{photo_id}")
async def get_photo(
    photo_id: str,
    photo_service: PhotoService = Depends(get_photo_service),
):
    """
    Get a stored photo's bytes, displayed inline.
    """
    path = photo_service.get(photo_id)
    if path is None:
        raise HTTPException(status_code=404, detail="Photo not found")

    return FileResponse(
        path,
        media_type=photo_service.content_type(path),
        headers={"Content-Disposition": "inline"},
    )
