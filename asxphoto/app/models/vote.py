"""Vote model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from asxphoto.app.db.base import Base

if TYPE_CHECKING:
    from asxphoto.app.models.photo import Photo
    from asxphoto.app.models.user import User


class Vote(Base):
    """
    Vote model representing a pilot's vote for a photo.

    Attributes:
        id: Unique vote identifier (UUID)
        photo_id: Voted photo ID
        user_id: Voting user ID
        vote_month: Contest period month the vote was cast in
        vote_year: Contest period year the vote was cast in
        created_at: Creation timestamp
    """

    __tablename__ = "votes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )
    photo_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("photos.id"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    vote_month: Mapped[int] = mapped_column(Integer, nullable=False)
    vote_year: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
    )

    # Relationships
    photo: Mapped["Photo"] = relationship("Photo", back_populates="votes")
    user: Mapped["User"] = relationship("User", back_populates="votes")

    # Unique constraint: one vote per user per photo
    __table_args__ = (
        Index("idx_vote_unique", "photo_id", "user_id", unique=True),
    )

    def __repr__(self) -> str:
        return f"<Vote(id={self.id}, photo_id={self.photo_id}, user_id={self.user_id})>"
