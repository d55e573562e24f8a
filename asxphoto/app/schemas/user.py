"""User-related schemas."""

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from asxphoto.app.utils.validators import normalize_callsign


class UserBase(BaseModel):
    """Fields shared by user create schemas."""

    email: EmailStr = Field(..., description="Login email")
    callsign: str = Field(..., min_length=1, max_length=10, description="Callsign, ASX followed by 3 digits")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")

    @field_validator("callsign")
    @classmethod
    def normalize(cls, v: str) -> str:
        return normalize_callsign(v)


class UserRegister(UserBase):
    """Schema for pilot self-registration."""

    password: str = Field(..., min_length=1, description="Password")
    confirm_password: str = Field(..., min_length=1, description="Password confirmation")


class UserCreate(UserBase):
    """Schema for staff-created accounts."""

    password: str = Field(..., min_length=1, description="Password")
    is_staff: bool = Field(default=False, description="Grant the staff capability")


class UserUpdate(BaseModel):
    """Schema for staff edits; only fields present are applied."""

    email: EmailStr | None = None
    callsign: str | None = Field(default=None, min_length=1, max_length=10)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    is_staff: bool | None = None


class ProfileUpdate(BaseModel):
    """Schema for a pilot editing their own profile."""

    callsign: str | None = Field(default=None, min_length=1, max_length=10)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)


class UserResponse(BaseModel):
    """Schema for user data in responses."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Login email")
    callsign: str = Field(..., description="Callsign")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    is_staff: bool = Field(default=False, description="Staff capability")
    created_at: datetime = Field(..., description="Registration timestamp")

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    """Schema for the staff user list."""

    users: list[UserResponse]


class QuotaResponse(BaseModel):
    """Schema for a pilot's quota usage in the current period."""

    month: int = Field(..., description="Contest period month")
    year: int = Field(..., description="Contest period year")
    upload_count: int = Field(..., description="Photos uploaded this period")
    upload_limit: int = Field(..., description="Uploads allowed per period")
    votes_used: int = Field(..., description="Votes counted against the quota")
    vote_limit: int = Field(..., description="Votes allowed")
    remaining_uploads: int = Field(..., ge=0, description="Uploads left, floored at 0")
    remaining_votes: int = Field(..., ge=0, description="Votes left, floored at 0")
    can_upload: bool = Field(..., description="Whether another upload is allowed")
