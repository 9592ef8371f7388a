"""
Generic image upload endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status

from educenter.core.logging_config import get_logger
from educenter.core.models.io.common import UploadRead
from educenter.server.api.deps import CurrentUser
from educenter.server.services.uploads import ImageUploadStorage, get_upload_storage

logger = get_logger(__name__)

router = APIRouter(tags=["upload"])


@router.post(
    "",
    response_model=UploadRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Image",
    description="Store a JPEG or PNG image (max 2 MiB) and return its public path.",
    responses={400: {"description": "Not an image or file too large"}},
)
async def upload_image(
    user: CurrentUser,
    file: UploadFile = File(...),
    storage: ImageUploadStorage = Depends(get_upload_storage),
) -> UploadRead:
    url = await storage.save(file)
    logger.info(f"User {user.id} uploaded {url}")
    return UploadRead(url=url)
