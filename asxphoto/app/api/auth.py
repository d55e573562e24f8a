"""Authentication endpoints: registration, login, session and sign-out."""

import logging

from fastapi import APIRouter, Depends, status

from asxphoto.app.api.dependencies import Caller, get_account_service, get_caller, get_optional_caller
from asxphoto.app.core.exceptions import UnauthorizedError
from asxphoto.app.core.security import (
    STAFF_PASSPHRASE_SUBJECT,
    create_access_token,
    verify_staff_passphrase,
)
from asxphoto.app.models.user import User
from asxphoto.app.schemas.auth import LoginRequest, SessionResponse, StaffLoginRequest, TokenResponse
from asxphoto.app.schemas.user import UserRegister, UserResponse
from asxphoto.app.services.accounts import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_for(user: User) -> TokenResponse:
    token, _ = create_access_token(user.id, staff=user.is_staff)
    return TokenResponse(
        access_token=token,
        is_staff=user.is_staff,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserRegister,
    accounts: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Register a pilot account and open a session for it."""
    user = await accounts.create_user(
        email=data.email,
        callsign=data.callsign,
        first_name=data.first_name,
        last_name=data.last_name,
        password=data.password,
        confirm_password=data.confirm_password,
    )
    return _token_for(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Log in with email and password."""
    user = await accounts.authenticate(data.email, data.password)
    logger.info(f"[AUTH] User {user.id} logged in")
    return _token_for(user)


@router.post("/staff-login", response_model=TokenResponse)
async def staff_login(data: StaffLoginRequest) -> TokenResponse:
    """
    Open a staff session with the shared staff passphrase.

    Only available when a passphrase is configured; staff accounts should log
    in through ``/auth/login`` instead.
    """
    if not verify_staff_passphrase(data.passphrase):
        logger.warning("[AUTH] Rejected staff passphrase login")
        raise UnauthorizedError("Invalid staff passphrase", details="Password staff non valida")

    token, _ = create_access_token(STAFF_PASSPHRASE_SUBJECT, staff=True)
    return TokenResponse(access_token=token, is_staff=True)


@router.get("/session", response_model=SessionResponse)
async def get_session(caller: Caller | None = Depends(get_optional_caller)) -> SessionResponse:
    """Return the current session; empty when not logged in."""
    if caller is None:
        return SessionResponse()
    return SessionResponse(
        user=UserResponse.model_validate(caller.user) if caller.user else None,
        is_staff=caller.is_staff,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    caller: Caller = Depends(get_caller),
    accounts: AccountService = Depends(get_account_service),
) -> None:
    """Sign out by revoking the presented token."""
    await accounts.revoke_token(caller.claims)
    logger.info(f"[AUTH] Session {caller.claims.jti} signed out")
