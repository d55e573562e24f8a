"""
Dependency wiring for the API routers.
"""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from asxphoto.app.core.exceptions import StaffRequiredError, UnauthorizedError
from asxphoto.app.core.security import STAFF_PASSPHRASE_SUBJECT, TokenClaims, decode_access_token
from asxphoto.app.db.base import get_db
from asxphoto.app.models.user import User
from asxphoto.app.services.accounts import AccountService
from asxphoto.app.services.moderation import ModerationWorkflow
from asxphoto.app.services.quota import QuotaTracker
from asxphoto.app.services.storage import StorageClient, get_storage_client

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Caller:
    """Authenticated request context.

    ``user`` is None for sessions opened with the shared staff passphrase.
    """

    claims: TokenClaims
    user: User | None
    is_staff: bool


def get_storage() -> StorageClient:
    return get_storage_client()


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_quota_tracker(db: AsyncSession = Depends(get_db)) -> QuotaTracker:
    return QuotaTracker(db)


def get_workflow(
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
) -> ModerationWorkflow:
    return ModerationWorkflow(db, storage)


async def get_optional_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    accounts: AccountService = Depends(get_account_service),
) -> Caller | None:
    """Resolve the bearer token, if any; invalid tokens are rejected."""
    if credentials is None:
        return None

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise UnauthorizedError("Invalid or expired token", details="Sessione scaduta. Accedi di nuovo.")
    if await accounts.is_token_revoked(claims.jti):
        raise UnauthorizedError("Token has been revoked", details="Sessione terminata. Accedi di nuovo.")

    if claims.subject == STAFF_PASSPHRASE_SUBJECT:
        if not claims.staff:
            raise UnauthorizedError("Invalid token subject")
        return Caller(claims=claims, user=None, is_staff=True)

    user = await accounts.db.get(User, claims.subject)
    if user is None:
        raise UnauthorizedError("Account no longer exists")
    # Staff capability follows the stored flag, not a possibly stale claim
    return Caller(claims=claims, user=user, is_staff=user.is_staff)


async def get_caller(caller: Caller | None = Depends(get_optional_caller)) -> Caller:
    if caller is None:
        raise UnauthorizedError()
    return caller


async def get_current_user(caller: Caller = Depends(get_caller)) -> User:
    """Require a pilot account (staff passphrase sessions have none)."""
    if caller.user is None:
        raise UnauthorizedError("A pilot account is required", details="Accedi con il tuo account pilota")
    return caller.user


async def require_staff(caller: Caller = Depends(get_caller)) -> Caller:
    if not caller.is_staff:
        raise StaffRequiredError()
    return caller
