"""Pydantic schemas for API request/response validation."""

from asxphoto.app.schemas.user import (
    UserRegister,
    UserCreate,
    UserUpdate,
    ProfileUpdate,
    UserResponse,
    UserListResponse,
    QuotaResponse,
)
from asxphoto.app.schemas.auth import (
    LoginRequest,
    StaffLoginRequest,
    TokenResponse,
    SessionResponse,
)
from asxphoto.app.schemas.photo import (
    PhotoResponse,
    PhotoListResponse,
    ResetRequest,
    ResetResponse,
    ContestResponse,
)

__all__ = [
    "UserRegister",
    "UserCreate",
    "UserUpdate",
    "ProfileUpdate",
    "UserResponse",
    "UserListResponse",
    "QuotaResponse",
    "LoginRequest",
    "StaffLoginRequest",
    "TokenResponse",
    "SessionResponse",
    "PhotoResponse",
    "PhotoListResponse",
    "ResetRequest",
    "ResetResponse",
    "ContestResponse",
]
