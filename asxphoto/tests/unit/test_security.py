"""Unit tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

import jwt

from asxphoto.app.core import security
from asxphoto.app.core.config import settings
from asxphoto.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
    verify_staff_passphrase,
)


def test_password_round_trip():
    password_hash = hash_password("secret123")

    assert password_hash != "secret123"
    assert verify_password("secret123", password_hash)
    assert not verify_password("secret124", password_hash)


def test_verify_password_with_garbage_hash():
    assert not verify_password("secret123", "not-a-hash")


def test_access_token_claims():
    token, claims = create_access_token("user-1", staff=True)
    decoded = decode_access_token(token)

    assert decoded is not None
    assert decoded.subject == "user-1"
    assert decoded.staff is True
    assert decoded.jti == claims.jti


def test_tampered_token_rejected():
    token, _ = create_access_token("user-1")
    assert decode_access_token(token[:-2] + "xx") is None


def test_expired_token_rejected():
    token = jwt.encode(
        {
            "sub": "user-1",
            "jti": "abc",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    assert decode_access_token(token) is None


def test_token_signed_with_other_key_rejected():
    token = jwt.encode(
        {"sub": "user-1", "jti": "abc", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "another-secret",
        algorithm="HS256",
    )
    assert decode_access_token(token) is None


def test_staff_passphrase_disabled_by_default(monkeypatch):
    monkeypatch.setattr(security.settings, "staff_passphrase", None)
    assert not verify_staff_passphrase("anything")


def test_staff_passphrase_configured(monkeypatch):
    monkeypatch.setattr(security.settings, "staff_passphrase", "hangar-door")
    assert verify_staff_passphrase("hangar-door")
    assert not verify_staff_passphrase("hangar-doors")
