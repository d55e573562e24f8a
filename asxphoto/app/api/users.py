"""Pilot profile and quota endpoints."""

from fastapi import APIRouter, Depends

from asxphoto.app.api.dependencies import get_account_service, get_current_user, get_quota_tracker
from asxphoto.app.models.user import User
from asxphoto.app.schemas.user import ProfileUpdate, QuotaResponse, UserResponse
from asxphoto.app.services.accounts import AccountService
from asxphoto.app.services.quota import QuotaTracker

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    """Get the caller's profile."""
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    profile: ProfileUpdate,
    user: User = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service),
) -> UserResponse:
    """Edit the caller's own callsign or name."""
    updated = await accounts.edit_user(user.id, profile.model_dump(exclude_unset=True))
    return UserResponse.model_validate(updated)


@router.get("/me/quota", response_model=QuotaResponse)
async def get_my_quota(
    user: User = Depends(get_current_user),
    quota: QuotaTracker = Depends(get_quota_tracker),
) -> QuotaResponse:
    """Upload and vote usage for the current contest period."""
    snapshot = await quota.status(user.id)
    return QuotaResponse(
        month=snapshot.period.month,
        year=snapshot.period.year,
        upload_count=snapshot.upload_count,
        upload_limit=snapshot.upload_limit,
        votes_used=snapshot.votes_used,
        vote_limit=snapshot.vote_limit,
        remaining_uploads=max(snapshot.remaining_uploads, 0),
        remaining_votes=max(snapshot.remaining_votes, 0),
        can_upload=snapshot.can_upload,
    )
