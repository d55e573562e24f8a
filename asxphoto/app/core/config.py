"""Application configuration."""

from typing import Literal
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./asxphoto.db",
        description="Database connection URL"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:8080,http://localhost:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Security
    secret_key: str = Field(
        default="change-this-to-a-random-secret-key-in-production",
        description="Secret key for JWT token generation"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_expiration_hours: int = Field(default=12, description="JWT token expiration in hours")
    staff_passphrase: str | None = Field(
        default=None,
        description="Legacy shared staff passphrase; staff passphrase login is disabled when unset"
    )
    min_password_length: int = Field(default=6, description="Minimum account password length")

    # Contest limits
    upload_limit: int = Field(default=3, description="Photos a pilot may upload per contest month")
    vote_limit: int = Field(default=3, description="Votes a pilot may cast")
    vote_quota_scope: Literal["all_time", "period"] = Field(
        default="all_time",
        description="Count votes since the last reset (all_time) or within the current month (period)"
    )

    # Photo validation
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, description="Maximum photo size in bytes (5MB)")
    title_max_length: int = Field(default=100, description="Maximum photo title length")
    description_max_length: int = Field(default=500, description="Maximum photo description length")

    # Object storage
    storage_backend: Literal["local", "s3", "memory"] = Field(
        default="local",
        description="Where uploaded photos are stored"
    )
    media_dir: str = Field(default="./media", description="Directory for the local storage backend")
    media_url_prefix: str = Field(default="/media", description="URL prefix the local media directory is served under")
    s3_bucket: str | None = Field(default=None, description="S3 bucket name")
    s3_endpoint: str | None = Field(default=None, description="S3-compatible endpoint URL")
    s3_region: str | None = Field(default=None, description="S3 region")
    s3_public_base_url: str | None = Field(default=None, description="Public base URL for stored objects")
    aws_access_key_id: str | None = Field(default=None, description="S3 access key")
    aws_secret_access_key: str | None = Field(default=None, description="S3 secret key")

    # Development Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("upload_limit", "vote_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        """Validate contest limits are not negative."""
        if v < 0:
            raise ValueError(f"Limit must not be negative, got {v}")
        return v

    @field_validator(
        "max_upload_bytes",
        "title_max_length",
        "description_max_length",
        "min_password_length",
        "jwt_expiration_hours",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate integer is positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("media_url_prefix")
    @classmethod
    def validate_media_url_prefix(cls, v: str) -> str:
        """Normalize the media prefix to a leading slash and no trailing slash."""
        v = "/" + v.strip("/")
        if v == "/":
            raise ValueError("media_url_prefix must not be the root path")
        return v

    @model_validator(mode="after")
    def validate_storage_backend(self) -> "Settings":
        """Validate the selected storage backend is fully configured."""
        if self.storage_backend == "s3" and not self.s3_bucket:
            raise ValueError("s3_bucket is required when storage_backend is 's3'")
        return self


# Global settings instance
settings = Settings()
