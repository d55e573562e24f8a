"""Input validation shared by request schemas and services."""

import re

from asxphoto.app.core.config import settings
from asxphoto.app.core.exceptions import ContestValidationError

CALLSIGN_PATTERN = re.compile(r"^ASX\d{3}$")

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def normalize_callsign(callsign: str) -> str:
    """Trim and upper-case a callsign before validation."""
    return callsign.strip().upper()


def validate_callsign(callsign: str) -> str:
    """Validate an already-normalized callsign (``ASX`` + three digits)."""
    if not CALLSIGN_PATTERN.match(callsign):
        raise ContestValidationError(
            f"Invalid callsign: {callsign!r}",
            details="Il callsign deve essere nel formato ASX seguito da 3 numeri (es. ASX010)",
            field="callsign",
        )
    return callsign


def validate_password(password: str, confirm_password: str | None = None) -> str:
    """Validate password length and, when given, its confirmation."""
    if len(password) < settings.min_password_length:
        raise ContestValidationError(
            f"Password must be at least {settings.min_password_length} characters",
            details=f"La password deve contenere almeno {settings.min_password_length} caratteri",
            field="password",
        )
    if confirm_password is not None and password != confirm_password:
        raise ContestValidationError(
            "Passwords do not match",
            details="Le password non coincidono",
            field="confirm_password",
        )
    return password


def validate_name(value: str, field: str) -> str:
    """Trim a first or last name; blank names are rejected."""
    value = value.strip()
    if not value:
        raise ContestValidationError(
            f"{field} must not be blank",
            details="Inserisci nome e cognome",
            field=field,
        )
    return value


def validate_photo_text(title: str, description: str) -> tuple[str, str]:
    """Validate and trim a photo title and description."""
    title = title.strip()
    description = description.strip()

    if not title:
        raise ContestValidationError("Title is required", details="Inserisci un titolo", field="title")
    if len(title) > settings.title_max_length:
        raise ContestValidationError(
            f"Title exceeds {settings.title_max_length} characters",
            details=f"Il titolo non deve superare i {settings.title_max_length} caratteri",
            field="title",
        )
    if not description:
        raise ContestValidationError(
            "Description is required", details="Inserisci una descrizione", field="description"
        )
    if len(description) > settings.description_max_length:
        raise ContestValidationError(
            f"Description exceeds {settings.description_max_length} characters",
            details=f"La descrizione non deve superare i {settings.description_max_length} caratteri",
            field="description",
        )
    return title, description


def validate_image(content_type: str | None, size: int) -> str:
    """
    Validate an uploaded image.

    Args:
        content_type: Declared MIME type of the file
        size: File size in bytes

    Returns:
        File extension to store the image under
    """
    if not content_type or content_type not in ALLOWED_IMAGE_TYPES:
        raise ContestValidationError(
            f"Unsupported file type: {content_type}",
            details="Seleziona un'immagine valida",
            field="file",
        )
    if size == 0:
        raise ContestValidationError("Empty file", details="Seleziona un'immagine", field="file")
    if size > settings.max_upload_bytes:
        max_mb = settings.max_upload_bytes // (1024 * 1024)
        raise ContestValidationError(
            f"File exceeds {settings.max_upload_bytes} bytes",
            details=f"L'immagine non deve superare i {max_mb}MB",
            field="file",
        )
    return ALLOWED_IMAGE_TYPES[content_type]
