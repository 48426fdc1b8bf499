"""
Hunter Router
Handles POST /api/hunter/submit (multipart form with optional photo)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.hunt import HuntSubmitResponse
from ..schemas.wallet import WalletOut
from ..services.hunt_service import HuntService, HuntSubmission
from ..services.media_uploader import MediaUploader

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hunter", tags=["hunter"])


def get_media_uploader() -> MediaUploader:
    """Dependency for the capture photo store (overridable in tests)."""
    return MediaUploader.from_settings()


@router.post("/submit", response_model=HuntSubmitResponse)
async def submit_hunt(
    user_id: str = Form(""),
    shop_name: str = Form(""),
    category: str = Form(""),
    vehicle_type: str = Form(""),
    latitude: Optional[float] = Form(None),
    longitude: Optional[float] = Form(None),
    is_shadow: str = Form("false"),
    activation_status: str = Form(""),
    asset_type: str = Form(""),
    photo: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    uploader: MediaUploader = Depends(get_media_uploader),
):
    """
    Submit a captured business. Rewards the hunter on success.
    """
    photo_bytes = None
    photo_content_type = None
    if photo is not None:
        try:
            photo_bytes = await photo.read()
            photo_content_type = photo.content_type
        except Exception as e:
            # Unreadable attachment is treated like a failed upload
            logger.warning(f"Could not read photo from {user_id}: {e}")
            photo_bytes = None

    submission = HuntSubmission(
        user_id=user_id,
        shop_name=shop_name,
        category=category,
        vehicle_type=vehicle_type,
        latitude=latitude,
        longitude=longitude,
        is_shadow=is_shadow == "true",
        activation_status=activation_status,
        asset_type=asset_type,
        photo=photo_bytes,
        photo_content_type=photo_content_type,
    )

    result = HuntService(db, uploader=uploader).submit(submission)

    return HuntSubmitResponse(
        message="Hunt submitted successfully",
        points=result.points,
        wallet=WalletOut.model_validate(result.wallet),
    )
