"""Password hashing and access token helpers."""

import hmac
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from asxphoto.app.core.config import settings

_hasher = PasswordHasher()

# Subject used by tokens issued through the shared staff passphrase
STAFF_PASSPHRASE_SUBJECT = "staff"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded access token."""

    subject: str
    jti: str
    staff: bool
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a password with Argon2id."""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches ``password_hash``."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def verify_staff_passphrase(passphrase: str) -> bool:
    """Compare against the configured staff passphrase in constant time.

    Always False when no passphrase is configured.
    """
    if not settings.staff_passphrase:
        return False
    return hmac.compare_digest(passphrase.encode("utf-8"), settings.staff_passphrase.encode("utf-8"))


def create_access_token(subject: str, staff: bool = False) -> tuple[str, TokenClaims]:
    """
    Issue a signed access token.

    Args:
        subject: User ID (or the staff passphrase subject)
        staff: Whether the token carries the staff capability

    Returns:
        Tuple of (encoded token, claims)
    """
    expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expiration_hours)
    claims = TokenClaims(
        subject=subject,
        jti=uuid.uuid4().hex,
        staff=staff,
        expires_at=expires_at,
    )
    token = jwt.encode(
        {
            "sub": claims.subject,
            "jti": claims.jti,
            "staff": claims.staff,
            "exp": expires_at,
        },
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return token, claims


def decode_access_token(token: str) -> TokenClaims | None:
    """Decode and verify an access token; None if invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "jti", "exp"]},
        )
    except jwt.InvalidTokenError:
        return None

    return TokenClaims(
        subject=str(payload["sub"]),
        jti=str(payload["jti"]),
        staff=bool(payload.get("staff", False)),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
