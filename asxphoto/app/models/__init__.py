"""Database models."""

from asxphoto.app.models.user import User
from asxphoto.app.models.photo import Photo
from asxphoto.app.models.vote import Vote
from asxphoto.app.models.revoked_token import RevokedToken

__all__ = ["User", "Photo", "Vote", "RevokedToken"]
