"""Photo endpoints: contest listings, upload and voting."""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from asxphoto.app.api.dependencies import (
    Caller,
    get_current_user,
    get_optional_caller,
    get_workflow,
)
from asxphoto.app.core.config import settings
from asxphoto.app.core.exceptions import ContestValidationError, PhotoNotFoundError
from asxphoto.app.db.base import get_db
from asxphoto.app.models.photo import Photo
from asxphoto.app.models.user import User
from asxphoto.app.schemas.photo import ContestResponse, PhotoListResponse, PhotoResponse
from asxphoto.app.services.moderation import ModerationWorkflow
from asxphoto.app.utils.period import current_period

logger = logging.getLogger(__name__)

router = APIRouter(tags=["photos"])


@router.get("/contest", response_model=ContestResponse)
async def get_contest() -> ContestResponse:
    """Current contest period and limits."""
    period = current_period()
    return ContestResponse(
        month=period.month,
        year=period.year,
        month_name=period.month_name,
        upload_limit=settings.upload_limit,
        vote_limit=settings.vote_limit,
    )


@router.get("/photos", response_model=PhotoListResponse)
async def list_approved_photos(
    month: int | None = Query(default=None, ge=1, le=12),
    year: int | None = Query(default=None, ge=2000),
    db: AsyncSession = Depends(get_db),
) -> PhotoListResponse:
    """
    Approved photos for a contest period, best voted first.

    Defaults to the current period.
    """
    period = current_period()
    result = await db.execute(
        select(Photo)
        .where(
            Photo.approved.is_(True),
            Photo.upload_month == (month or period.month),
            Photo.upload_year == (year or period.year),
        )
        .order_by(Photo.vote_count.desc(), Photo.created_at)
    )
    photos = result.scalars().all()
    return PhotoListResponse(photos=[PhotoResponse.model_validate(p) for p in photos])


@router.get("/photos/mine", response_model=PhotoListResponse)
async def list_my_photos(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PhotoListResponse:
    """The caller's photos for the current period, pending and approved."""
    period = current_period()
    result = await db.execute(
        select(Photo)
        .where(
            Photo.user_id == user.id,
            Photo.upload_month == period.month,
            Photo.upload_year == period.year,
        )
        .order_by(Photo.created_at.desc())
    )
    photos = result.scalars().all()
    return PhotoListResponse(photos=[PhotoResponse.model_validate(p) for p in photos])


@router.get("/photos/{photo_id}", response_model=PhotoResponse)
async def get_photo(
    photo_id: str,
    caller: Caller | None = Depends(get_optional_caller),
    db: AsyncSession = Depends(get_db),
) -> PhotoResponse:
    """A single photo; pending photos are visible to their owner and staff only."""
    photo = await db.get(Photo, photo_id)
    if not photo:
        raise PhotoNotFoundError(photo_id)

    if not photo.approved:
        is_owner = caller is not None and caller.user is not None and caller.user.id == photo.user_id
        if not (is_owner or (caller is not None and caller.is_staff)):
            logger.debug(f"[PHOTO] Pending photo {photo_id} hidden from caller")
            raise PhotoNotFoundError(photo_id)

    return PhotoResponse.model_validate(photo)


@router.post("/photos", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    title: str = Form(...),
    description: str = Form(...),
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    workflow: ModerationWorkflow = Depends(get_workflow),
) -> PhotoResponse:
    """Upload a photo for the current contest month; it starts pending."""
    if file.size is not None and file.size > settings.max_upload_bytes:
        # Reject before reading an oversized body into memory
        logger.info(f"[UPLOAD] Rejected {file.size} byte file from user {user.id}")
        raise ContestValidationError(
            f"File exceeds {settings.max_upload_bytes} bytes",
            details=f"L'immagine non deve superare i {settings.max_upload_bytes // (1024 * 1024)}MB",
            field="file",
        )

    data = await file.read()
    photo = await workflow.upload(
        user=user,
        title=title,
        description=description,
        content_type=file.content_type,
        data=data,
    )
    return PhotoResponse.model_validate(photo)


@router.post("/photos/{photo_id}/vote", response_model=PhotoResponse)
async def vote_photo(
    photo_id: str,
    user: User = Depends(get_current_user),
    workflow: ModerationWorkflow = Depends(get_workflow),
) -> PhotoResponse:
    """Vote for an approved photo of another pilot."""
    photo = await workflow.vote(user.id, photo_id)
    return PhotoResponse.model_validate(photo)
