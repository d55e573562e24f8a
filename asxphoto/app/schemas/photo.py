"""Photo-related schemas."""

from datetime import datetime
from pydantic import BaseModel, Field


class PhotoResponse(BaseModel):
    """Schema for photo data in responses."""

    id: str = Field(..., description="Photo ID")
    user_id: str = Field(..., description="Owner user ID")
    title: str = Field(..., description="Photo title")
    description: str = Field(..., description="Photo description")
    image_url: str = Field(..., description="Public image URL")
    callsign: str = Field(..., description="Owner callsign at upload time")
    uploader_name: str = Field(..., description="Owner name at upload time")
    approved: bool = Field(..., description="False while pending review")
    vote_count: int = Field(..., ge=0, description="Votes received")
    upload_month: int = Field(..., ge=1, le=12, description="Contest period month")
    upload_year: int = Field(..., description="Contest period year")
    created_at: datetime = Field(..., description="Upload timestamp")

    model_config = {"from_attributes": True}


class PhotoListResponse(BaseModel):
    """Schema for photo lists."""

    photos: list[PhotoResponse]


class ResetRequest(BaseModel):
    """Explicit confirmation for the monthly reset."""

    confirm: bool = Field(default=False, description="Must be true to reset all photos")


class ResetResponse(BaseModel):
    """Result of the monthly reset."""

    deleted_photos: int


class ContestResponse(BaseModel):
    """Current contest period and limits."""

    month: int
    year: int
    month_name: str
    upload_limit: int
    vote_limit: int
