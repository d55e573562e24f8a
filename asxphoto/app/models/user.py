"""User model."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from asxphoto.app.db.base import Base

if TYPE_CHECKING:
    from asxphoto.app.models.photo import Photo
    from asxphoto.app.models.vote import Vote


class User(Base):
    """
    User model representing a registered pilot.

    Attributes:
        id: Unique user identifier (UUID)
        email: Login email (unique)
        callsign: Pilot callsign, ``ASX`` followed by three digits (unique)
        first_name: Pilot's first name
        last_name: Pilot's last name
        password_hash: Argon2 password hash
        is_staff: Whether the pilot holds the staff capability
        created_at: Registration timestamp
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    callsign: Mapped[str] = mapped_column(String(6), nullable=False, unique=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_staff: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
    )

    # Relationships
    photos: Mapped[list["Photo"]] = relationship("Photo", back_populates="user")
    votes: Mapped[list["Vote"]] = relationship("Vote", back_populates="user")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, callsign={self.callsign}, is_staff={self.is_staff})>"
