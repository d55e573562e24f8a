"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from asxphoto.app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Email and password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class StaffLoginRequest(BaseModel):
    """Shared staff passphrase login."""

    passphrase: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Issued access token with the session it represents."""

    access_token: str
    token_type: str = "bearer"
    is_staff: bool = False
    user: UserResponse | None = None


class SessionResponse(BaseModel):
    """The caller's current session."""

    user: UserResponse | None = None
    is_staff: bool = False
