"""Staff endpoints: photo moderation, monthly reset and user management."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from asxphoto.app.api.dependencies import (
    Caller,
    get_account_service,
    get_storage,
    get_workflow,
    require_staff,
)
from asxphoto.app.core.exceptions import ContestValidationError
from asxphoto.app.db.base import get_db
from asxphoto.app.models.photo import Photo
from asxphoto.app.schemas.photo import PhotoListResponse, PhotoResponse, ResetRequest, ResetResponse
from asxphoto.app.schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate
from asxphoto.app.services.accounts import AccountService
from asxphoto.app.services.moderation import ModerationWorkflow
from asxphoto.app.services.storage import StorageClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff", tags=["staff"], dependencies=[Depends(require_staff)])


def _actor(caller: Caller) -> str:
    return caller.user.callsign if caller.user else "staff passphrase"


@router.get("/photos/pending", response_model=PhotoListResponse)
async def list_pending_photos(db: AsyncSession = Depends(get_db)) -> PhotoListResponse:
    """Photos awaiting review, oldest first."""
    result = await db.execute(
        select(Photo).where(Photo.approved.is_(False)).order_by(Photo.created_at)
    )
    return PhotoListResponse(photos=[PhotoResponse.model_validate(p) for p in result.scalars().all()])


@router.get("/photos", response_model=PhotoListResponse)
async def list_all_photos(db: AsyncSession = Depends(get_db)) -> PhotoListResponse:
    """Every photo of every period, newest first."""
    result = await db.execute(select(Photo).order_by(Photo.created_at.desc()))
    return PhotoListResponse(photos=[PhotoResponse.model_validate(p) for p in result.scalars().all()])


@router.post("/photos/reset", response_model=ResetResponse)
async def reset_photos(
    request: ResetRequest,
    caller: Caller = Depends(require_staff),
    workflow: ModerationWorkflow = Depends(get_workflow),
) -> ResetResponse:
    """Delete all photos and votes to start a new contest month."""
    if not request.confirm:
        logger.info(f"[RESET] Unconfirmed reset request from {_actor(caller)}")
        raise ContestValidationError(
            "Reset requires explicit confirmation",
            details="Conferma il reset delle foto",
            field="confirm",
        )
    logger.warning(f"[RESET] Contest reset requested by {_actor(caller)}")
    deleted = await workflow.reset_all_photos()
    return ResetResponse(deleted_photos=deleted)


@router.post("/photos/{photo_id}/approve", response_model=PhotoResponse)
async def approve_photo(
    photo_id: str,
    caller: Caller = Depends(require_staff),
    workflow: ModerationWorkflow = Depends(get_workflow),
) -> PhotoResponse:
    """Approve a pending photo."""
    logger.info(f"[MODERATION] {_actor(caller)} approving photo {photo_id}")
    photo = await workflow.approve(photo_id)
    return PhotoResponse.model_validate(photo)


@router.post("/photos/{photo_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
async def reject_photo(
    photo_id: str,
    caller: Caller = Depends(require_staff),
    workflow: ModerationWorkflow = Depends(get_workflow),
) -> None:
    """Reject a photo, removing it."""
    logger.info(f"[MODERATION] {_actor(caller)} rejecting photo {photo_id}")
    await workflow.reject(photo_id)


@router.delete("/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(
    photo_id: str,
    caller: Caller = Depends(require_staff),
    workflow: ModerationWorkflow = Depends(get_workflow),
) -> None:
    """Delete an approved photo."""
    logger.info(f"[MODERATION] {_actor(caller)} deleting photo {photo_id}")
    await workflow.delete_photo(photo_id)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    search: str | None = None,
    accounts: AccountService = Depends(get_account_service),
) -> UserListResponse:
    """List pilots, optionally filtered by callsign, name or email."""
    users = await accounts.list_users(search)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    accounts: AccountService = Depends(get_account_service),
) -> UserResponse:
    """Create a pilot or staff account."""
    user = await accounts.create_user(
        email=data.email,
        callsign=data.callsign,
        first_name=data.first_name,
        last_name=data.last_name,
        password=data.password,
        is_staff=data.is_staff,
    )
    return UserResponse.model_validate(user)


@router.patch("/users/{user_id}", response_model=UserResponse)
async def edit_user(
    user_id: str,
    changes: UserUpdate,
    accounts: AccountService = Depends(get_account_service),
) -> UserResponse:
    """Apply only the fields present in the request."""
    user = await accounts.edit_user(user_id, changes.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    caller: Caller = Depends(require_staff),
    accounts: AccountService = Depends(get_account_service),
    storage: StorageClient = Depends(get_storage),
) -> None:
    """Delete a pilot with their photos and votes."""
    logger.info(f"[AUTH] {_actor(caller)} deleting user {user_id}")
    await accounts.delete_user(user_id, storage)
