from fastapi import APIRouter

from app.schemas.uploads import UploadParams
from app.services.image_service import image_service

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/signature", response_model=UploadParams, response_model_exclude_none=True)
async def upload_signature():
    """Parameters for uploading an image from the browser straight to the image host."""
    return UploadParams(**image_service.upload_params())
