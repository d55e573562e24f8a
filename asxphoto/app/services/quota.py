"""
Monthly upload and vote quotas.

Counts are always read fresh from the database; nothing is cached between
requests, so a quota check made right after an upload or vote sees it.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from asxphoto.app.core.config import Settings, settings as default_settings
from asxphoto.app.core.exceptions import QuotaUnavailableError
from asxphoto.app.models.photo import Photo
from asxphoto.app.models.vote import Vote
from asxphoto.app.utils.period import ContestPeriod, current_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaStatus:
    """A pilot's quota usage for one contest period."""

    period: ContestPeriod
    upload_count: int
    upload_limit: int
    votes_used: int
    vote_limit: int

    @property
    def remaining_uploads(self) -> int:
        return self.upload_limit - self.upload_count

    @property
    def remaining_votes(self) -> int:
        return self.vote_limit - self.votes_used

    @property
    def can_upload(self) -> bool:
        return self.remaining_uploads > 0


class QuotaTracker:
    """Answers how much of a pilot's monthly quota remains."""

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or default_settings

    @property
    def upload_limit(self) -> int:
        return self.settings.upload_limit

    @property
    def vote_limit(self) -> int:
        return self.settings.vote_limit

    async def get_upload_count(self, user_id: str, period: ContestPeriod | None = None) -> int:
        """Count photos owned by ``user_id`` uploaded in ``period``."""
        period = period or current_period()
        query = select(func.count(Photo.id)).where(
            Photo.user_id == user_id,
            Photo.upload_month == period.month,
            Photo.upload_year == period.year,
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"[QUOTA] Upload count failed for user {user_id}: {e}")
            raise QuotaUnavailableError("upload", e) from e
        return result.scalar_one()

    async def get_vote_count(self, user_id: str, period: ContestPeriod | None = None) -> int:
        """
        Count votes cast by ``user_id``.

        With ``vote_quota_scope="all_time"`` every vote since the last reset
        counts; with ``"period"`` only votes cast in ``period`` count.
        """
        query = select(func.count(Vote.id)).where(Vote.user_id == user_id)
        if self.settings.vote_quota_scope == "period":
            period = period or current_period()
            query = query.where(
                Vote.vote_month == period.month,
                Vote.vote_year == period.year,
            )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"[QUOTA] Vote count failed for user {user_id}: {e}")
            raise QuotaUnavailableError("vote", e) from e
        return result.scalar_one()

    async def remaining_uploads(self, user_id: str, period: ContestPeriod | None = None) -> int:
        """Raw remaining uploads; may be negative if the limit was lowered."""
        return self.upload_limit - await self.get_upload_count(user_id, period)

    async def remaining_votes(self, user_id: str, period: ContestPeriod | None = None) -> int:
        return self.vote_limit - await self.get_vote_count(user_id, period)

    async def can_upload(self, user_id: str, period: ContestPeriod | None = None) -> bool:
        return await self.remaining_uploads(user_id, period) > 0

    async def can_vote(self, user_id: str | None, photo: Photo) -> bool:
        """True if an authenticated caller may vote for someone else's photo."""
        if not user_id:
            return False
        if photo.user_id == user_id:
            return False
        return await self.remaining_votes(user_id) > 0

    async def status(self, user_id: str, period: ContestPeriod | None = None) -> QuotaStatus:
        """Snapshot of upload and vote usage for ``period``."""
        period = period or current_period()
        return QuotaStatus(
            period=period,
            upload_count=await self.get_upload_count(user_id, period),
            upload_limit=self.upload_limit,
            votes_used=await self.get_vote_count(user_id, period),
            vote_limit=self.vote_limit,
        )
