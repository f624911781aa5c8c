"""Image upload route for cover images and avatars."""
from fastapi import APIRouter, Depends, File, UploadFile, status

from api.dependencies import get_storage, require_session
from api.schemas.responses import UploadResponse
from api.services.authorization import SessionContext
from api.services.storage import ImageStorage


router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/images", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    session: SessionContext = Depends(require_session),
    storage: ImageStorage = Depends(get_storage)
):
    """Store an image under the caller's account prefix and return its URL."""
    data = await file.read()
    stored = await storage.save_image(session.account_id, file.filename, data)
    return UploadResponse(message="تم رفع الصورة بنجاح", **stored)
