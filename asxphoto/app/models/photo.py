"""Photo model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, Text, Integer, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from asxphoto.app.db.base import Base

if TYPE_CHECKING:
    from asxphoto.app.models.user import User
    from asxphoto.app.models.vote import Vote


class Photo(Base):
    """
    Photo model representing one contest submission.

    ``callsign`` and ``uploader_name`` are snapshots taken at upload time and
    are not updated when the owner later edits their profile.

    Attributes:
        id: Unique photo identifier (UUID)
        user_id: Owning user ID
        title: Photo title
        description: Photo description
        image_url: Public URL of the stored image
        storage_path: Object key in storage
        callsign: Owner callsign at upload time
        uploader_name: Owner display name at upload time
        approved: False while pending staff review
        vote_count: Number of votes cast for this photo
        upload_month: Contest period month (1-12)
        upload_year: Contest period year
        created_at: Upload timestamp
    """

    __tablename__ = "photos"
    __table_args__ = (
        Index("idx_photo_user_period", "user_id", "upload_month", "upload_year"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    storage_path: Mapped[str] = mapped_column(String(512), nullable=False)
    callsign: Mapped[str] = mapped_column(String(6), nullable=False)
    uploader_name: Mapped[str] = mapped_column(String(255), nullable=False)
    approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upload_month: Mapped[int] = mapped_column(Integer, nullable=False)
    upload_year: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        index=True,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="photos")
    votes: Mapped[list["Vote"]] = relationship("Vote", back_populates="photo")

    def __repr__(self) -> str:
        return (
            f"<Photo(id={self.id}, title={self.title[:30]}, approved={self.approved}, "
            f"vote_count={self.vote_count})>"
        )
