"""Unit tests for input validators."""

import pytest

from asxphoto.app.core.exceptions import ContestValidationError
from asxphoto.app.utils.validators import (
    normalize_callsign,
    validate_callsign,
    validate_image,
    validate_name,
    validate_password,
    validate_photo_text,
)


class TestCallsign:
    """Callsign format: ASX followed by exactly three digits."""

    @pytest.mark.parametrize("callsign", ["ASX010", "ASX000", "ASX999"])
    def test_valid(self, callsign):
        assert validate_callsign(callsign) == callsign

    @pytest.mark.parametrize("callsign", ["ASX01", "ASX0100", "ABC010", "ASXABC", "", "ASX 10"])
    def test_invalid(self, callsign):
        with pytest.raises(ContestValidationError) as exc_info:
            validate_callsign(callsign)
        assert exc_info.value.field == "callsign"

    def test_lowercase_rejected_until_normalized(self):
        """Lowercase callsigns fail as-is and pass once normalized."""
        with pytest.raises(ContestValidationError):
            validate_callsign("asx010")

        normalized = normalize_callsign("asx010")
        assert normalized == "ASX010"
        assert validate_callsign(normalized) == "ASX010"

    def test_normalize_trims(self):
        assert normalize_callsign("  asx123 ") == "ASX123"


class TestPassword:
    def test_too_short(self):
        with pytest.raises(ContestValidationError, match="at least 6"):
            validate_password("abc")

    def test_mismatched_confirmation(self):
        with pytest.raises(ContestValidationError, match="do not match"):
            validate_password("secret123", "secret124")

    def test_valid(self):
        assert validate_password("secret123", "secret123") == "secret123"


class TestName:
    def test_trims(self):
        assert validate_name("  Marco ", "first_name") == "Marco"

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_rejected(self, value):
        with pytest.raises(ContestValidationError) as exc_info:
            validate_name(value, "last_name")
        assert exc_info.value.field == "last_name"


class TestPhotoText:
    def test_trims(self):
        assert validate_photo_text("  Final approach ", " Runway 16L ") == ("Final approach", "Runway 16L")

    @pytest.mark.parametrize("title,description", [("", "desc"), ("   ", "desc"), ("title", ""), ("title", "  ")])
    def test_empty_rejected(self, title, description):
        with pytest.raises(ContestValidationError):
            validate_photo_text(title, description)

    def test_length_bounds(self):
        validate_photo_text("t" * 100, "d" * 500)

        with pytest.raises(ContestValidationError, match="Title exceeds"):
            validate_photo_text("t" * 101, "desc")

        with pytest.raises(ContestValidationError, match="Description exceeds"):
            validate_photo_text("title", "d" * 501)


class TestImage:
    def test_extension_for_type(self):
        assert validate_image("image/png", 1024) == ".png"
        assert validate_image("image/jpeg", 1024) == ".jpg"

    @pytest.mark.parametrize("content_type", [None, "application/pdf", "text/plain"])
    def test_non_image_rejected(self, content_type):
        with pytest.raises(ContestValidationError, match="Unsupported file type"):
            validate_image(content_type, 1024)

    def test_size_limit(self):
        validate_image("image/png", 5 * 1024 * 1024)

        with pytest.raises(ContestValidationError) as exc_info:
            validate_image("image/png", 5 * 1024 * 1024 + 1)
        assert "5MB" in exc_info.value.details

    def test_empty_file_rejected(self):
        with pytest.raises(ContestValidationError, match="Empty file"):
            validate_image("image/png", 0)
