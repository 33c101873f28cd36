"""
Upload routes: images for article content.
"""

from fastapi import APIRouter, File, UploadFile

from ..auth import CurrentUserId
from ..schemas import UploadResponse
from ..services import UploadServiceDep

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/image")
async def upload_image(
    user_id: CurrentUserId,
    service: UploadServiceDep,
    file: UploadFile = File(...),
) -> UploadResponse:
    """Upload a JPG, PNG, GIF or WebP image and get back its URL."""
    # One byte past the limit is enough to know the file is too large
    content = await file.read(service.max_bytes + 1)
    url, filename = service.save_image(file.filename, file.content_type, content)
    return UploadResponse(url=url, filename=filename)
