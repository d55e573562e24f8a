"""
Photo moderation workflow.

Photos start pending (``approved=False``). Staff approve them, or remove them
with reject/delete. Removal is final: there is no way back to pending. Votes
are at most one per (photo, user) and never for one's own photo.
"""

import logging
import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from asxphoto.app.core.exceptions import (
    AlreadyVotedError,
    PhotoNotFoundError,
    QuotaExceededError,
    QuotaUnavailableError,
    RemoteFailureError,
    SelfVoteError,
)
from asxphoto.app.models.photo import Photo
from asxphoto.app.models.user import User
from asxphoto.app.models.vote import Vote
from asxphoto.app.services.quota import QuotaTracker
from asxphoto.app.services.storage import StorageClient
from asxphoto.app.utils.period import current_period
from asxphoto.app.utils.validators import validate_image, validate_photo_text

logger = logging.getLogger(__name__)


class ModerationWorkflow:
    """State transitions for photos and votes."""

    def __init__(
        self,
        db: AsyncSession,
        storage: StorageClient,
        quota: QuotaTracker | None = None,
    ):
        self.db = db
        self.storage = storage
        self.quota = quota or QuotaTracker(db)

    async def _get_photo(self, photo_id: str) -> Photo:
        photo = await self.db.get(Photo, photo_id)
        if not photo:
            raise PhotoNotFoundError(photo_id)
        return photo

    async def upload(
        self,
        user: User,
        title: str,
        description: str,
        content_type: str | None,
        data: bytes,
    ) -> Photo:
        """
        Store a new pending photo for ``user`` in the current period.

        Validation and the quota check happen before anything is written.
        If the database insert fails after the file was stored, the file is
        left behind and the failure is reported.
        """
        title, description = validate_photo_text(title, description)
        extension = validate_image(content_type, len(data))

        period = current_period()
        if not await self.quota.can_upload(user.id, period):
            logger.info(f"[UPLOAD] User {user.id} reached upload limit for {period.month}/{period.year}")
            raise QuotaExceededError("upload", self.quota.upload_limit)

        storage_path = f"photos/{user.id}/{uuid.uuid4().hex}{extension}"
        try:
            image_url = await self.storage.upload(storage_path, data, content_type)
        except Exception as e:
            logger.error(f"[UPLOAD] Storage upload failed for user {user.id}: {e}")
            raise RemoteFailureError("storage upload", e) from e

        photo = Photo(
            user_id=user.id,
            title=title,
            description=description,
            image_url=image_url,
            storage_path=storage_path,
            callsign=user.callsign,
            uploader_name=user.display_name,
            approved=False,
            vote_count=0,
            upload_month=period.month,
            upload_year=period.year,
        )
        self.db.add(photo)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"[UPLOAD] Photo insert failed for user {user.id}, orphaned file {storage_path}: {e}"
            )
            raise RemoteFailureError("photo insert", e) from e
        await self.db.refresh(photo)

        logger.info(f"[UPLOAD] User {user.id} uploaded photo {photo.id}")
        return photo

    async def vote(self, user_id: str, photo_id: str) -> Photo:
        """
        Cast one vote for an approved photo.

        The vote insert and the counter increment share one transaction; a
        duplicate vote rolls back both, so the counter never moves twice. The
        vote quota is counted again after the insert, so concurrent votes on
        different photos cannot exceed the limit.
        """
        photo = await self.db.get(Photo, photo_id)
        if not photo or not photo.approved:
            raise PhotoNotFoundError(photo_id)

        if photo.user_id == user_id:
            raise SelfVoteError(photo_id)

        existing = await self.db.execute(
            select(Vote.id).where(Vote.photo_id == photo_id, Vote.user_id == user_id)
        )
        if existing.scalar_one_or_none():
            raise AlreadyVotedError(photo_id, user_id)

        period = current_period()
        if await self.quota.remaining_votes(user_id, period) <= 0:
            raise QuotaExceededError("vote", self.quota.vote_limit)

        self.db.add(
            Vote(
                photo_id=photo_id,
                user_id=user_id,
                vote_month=period.month,
                vote_year=period.year,
            )
        )
        try:
            await self.db.flush()
            if await self.quota.remaining_votes(user_id, period) < 0:
                # A concurrent vote from the same user took the last slot
                await self.db.rollback()
                raise QuotaExceededError("vote", self.quota.vote_limit)
            await self.db.execute(
                update(Photo)
                .where(Photo.id == photo_id)
                .values(vote_count=Photo.vote_count + 1)
            )
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent vote from the same user
            await self.db.rollback()
            raise AlreadyVotedError(photo_id, user_id)
        except QuotaUnavailableError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[VOTE] Vote insert failed for photo {photo_id}: {e}")
            raise RemoteFailureError("vote insert", e) from e

        await self.db.refresh(photo)
        logger.info(f"[VOTE] User {user_id} voted for photo {photo_id} (votes: {photo.vote_count})")
        return photo

    async def approve(self, photo_id: str) -> Photo:
        """Approve a pending photo. Approving twice is a no-op."""
        photo = await self._get_photo(photo_id)
        if photo.approved:
            return photo

        photo.approved = True
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteFailureError("photo update", e) from e
        await self.db.refresh(photo)

        logger.info(f"[MODERATION] Approved photo {photo_id}")
        return photo

    async def reject(self, photo_id: str) -> None:
        """Remove a photo outright; usually a pending one."""
        await self._remove(photo_id, action="Rejected")

    async def delete_photo(self, photo_id: str) -> None:
        """Remove a photo; usually an approved one."""
        await self._remove(photo_id, action="Deleted")

    async def _remove(self, photo_id: str, action: str) -> None:
        photo = await self._get_photo(photo_id)
        storage_path = photo.storage_path

        try:
            await self.db.execute(delete(Vote).where(Vote.photo_id == photo_id))
            await self.db.execute(delete(Photo).where(Photo.id == photo_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteFailureError("photo delete", e) from e

        logger.info(f"[MODERATION] {action} photo {photo_id}")
        await self.discard_files([storage_path])

    async def reset_all_photos(self) -> int:
        """
        Delete every photo and vote, for all periods.

        Irreversible; callers must obtain confirmation before invoking.

        Returns:
            Number of photos removed
        """
        result = await self.db.execute(select(Photo.storage_path))
        storage_paths = list(result.scalars().all())

        try:
            await self.db.execute(delete(Vote))
            await self.db.execute(delete(Photo))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise RemoteFailureError("photo reset", e) from e

        logger.warning(f"[RESET] Removed {len(storage_paths)} photos and all votes")
        await self.discard_files(storage_paths)
        return len(storage_paths)

    async def discard_files(self, storage_paths: list[str]) -> None:
        """Delete stored files whose rows are already gone.

        A failure leaves an orphaned object for an out-of-band sweep.
        """
        for path in storage_paths:
            try:
                await self.storage.delete(path)
            except Exception as e:
                logger.warning(f"[STORAGE] Failed to delete {path}, leaving orphaned object: {e}")
