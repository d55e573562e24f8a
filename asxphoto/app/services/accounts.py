"""
Pilot accounts: registration, credentials, staff user management and
session revocation.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from asxphoto.app.core.exceptions import (
    ConflictError,
    RemoteFailureError,
    UnauthorizedError,
    UserNotFoundError,
)
from asxphoto.app.core.security import TokenClaims, hash_password, verify_password
from asxphoto.app.models.photo import Photo
from asxphoto.app.models.revoked_token import RevokedToken
from asxphoto.app.models.user import User
from asxphoto.app.models.vote import Vote
from asxphoto.app.services.moderation import ModerationWorkflow
from asxphoto.app.services.storage import StorageClient
from asxphoto.app.utils.validators import (
    normalize_callsign,
    validate_callsign,
    validate_name,
    validate_password,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("email", "callsign", "first_name", "last_name", "is_staff")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Account management over the ``users`` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def _ensure_unique(self, email: str | None, callsign: str | None, exclude_id: str | None = None) -> None:
        if email is not None:
            query = select(User.id).where(User.email == email)
            if exclude_id:
                query = query.where(User.id != exclude_id)
            if (await self.db.execute(query)).scalar_one_or_none():
                raise ConflictError("email", email)
        if callsign is not None:
            query = select(User.id).where(User.callsign == callsign)
            if exclude_id:
                query = query.where(User.id != exclude_id)
            if (await self.db.execute(query)).scalar_one_or_none():
                raise ConflictError("callsign", callsign)

    async def _commit(self, step: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Unique index hit by a concurrent request
            await self.db.rollback()
            field = "callsign" if "callsign" in str(e.orig) else "email"
            raise ConflictError(field, "") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteFailureError(step, e) from e

    async def create_user(
        self,
        email: str,
        callsign: str,
        first_name: str,
        last_name: str,
        password: str,
        confirm_password: str | None = None,
        is_staff: bool = False,
    ) -> User:
        """Create an account; used by registration and by staff."""
        email = normalize_email(email)
        callsign = validate_callsign(normalize_callsign(callsign))
        validate_password(password, confirm_password)
        first_name = validate_name(first_name, "first_name")
        last_name = validate_name(last_name, "last_name")
        await self._ensure_unique(email, callsign)

        user = User(
            email=email,
            callsign=callsign,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
            is_staff=is_staff,
        )
        self.db.add(user)
        await self._commit("user insert")
        await self.db.refresh(user)

        logger.info(f"[AUTH] Created user {user.id} ({user.callsign}, staff={user.is_staff})")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials or raise UnauthorizedError."""
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        user = result.scalar_one_or_none()
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"[AUTH] Failed login for {email}")
            raise UnauthorizedError(
                "Invalid email or password",
                details="Errore di accesso. Controlla email e password.",
            )
        return user

    async def list_users(self, search: str | None = None) -> list[User]:
        """List users, optionally filtered by callsign, name or email."""
        query = select(User).order_by(User.callsign)
        if search:
            pattern = f"%{search.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(User.callsign).like(pattern),
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                    func.lower(User.email).like(pattern),
                )
            )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def edit_user(self, user_id: str, changes: dict[str, Any]) -> User:
        """
        Apply a partial update; fields absent from ``changes`` are untouched.

        Photos keep the callsign and name captured at upload time.
        """
        user = await self.get_user(user_id)
        changes = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS and value is not None}

        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
        if "callsign" in changes:
            changes["callsign"] = validate_callsign(normalize_callsign(changes["callsign"]))
        for name_field in ("first_name", "last_name"):
            if name_field in changes:
                changes[name_field] = validate_name(changes[name_field], name_field)

        await self._ensure_unique(changes.get("email"), changes.get("callsign"), exclude_id=user_id)

        for key, value in changes.items():
            setattr(user, key, value)
        await self._commit("user update")
        await self.db.refresh(user)

        logger.info(f"[AUTH] Updated user {user_id}: {sorted(changes)}")
        return user

    async def delete_user(self, user_id: str, storage: StorageClient) -> None:
        """
        Delete a user together with everything referencing it.

        Votes the user cast are removed and the affected photos' counters
        decremented; the user's own photos go with all their votes.
        """
        await self.get_user(user_id)

        photo_rows = await self.db.execute(
            select(Photo.id, Photo.storage_path).where(Photo.user_id == user_id)
        )
        own_photos = photo_rows.all()
        own_photo_ids = [row.id for row in own_photos]

        try:
            voted = await self.db.execute(select(Vote.photo_id).where(Vote.user_id == user_id))
            for photo_id in voted.scalars().all():
                await self.db.execute(
                    update(Photo)
                    .where(Photo.id == photo_id)
                    .values(vote_count=Photo.vote_count - 1)
                )
            await self.db.execute(delete(Vote).where(Vote.user_id == user_id))
            if own_photo_ids:
                await self.db.execute(delete(Vote).where(Vote.photo_id.in_(own_photo_ids)))
                await self.db.execute(delete(Photo).where(Photo.id.in_(own_photo_ids)))
            await self.db.execute(delete(User).where(User.id == user_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteFailureError("user delete", e) from e

        logger.info(f"[AUTH] Deleted user {user_id} and {len(own_photo_ids)} photos")
        await ModerationWorkflow(self.db, storage).discard_files([row.storage_path for row in own_photos])

    async def revoke_token(self, claims: TokenClaims) -> None:
        """Sign out: reject the token's ``jti`` from now on."""
        if await self.is_token_revoked(claims.jti):
            return
        self.db.add(
            RevokedToken(
                jti=claims.jti,
                expires_at=claims.expires_at.replace(tzinfo=None),
            )
        )
        await self._commit("token revoke")

        # Expired entries no longer need to be remembered
        await self.db.execute(delete(RevokedToken).where(RevokedToken.expires_at < datetime.utcnow()))
        await self.db.commit()

    async def is_token_revoked(self, jti: str) -> bool:
        return await self.db.get(RevokedToken, jti) is not None
