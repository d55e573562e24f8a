"""Unit tests for auth API endpoints."""

import pytest

from asxphoto.app.core import security

REGISTRATION = {
    "email": "giulia@example.com",
    "callsign": "asx010",
    "first_name": "Giulia",
    "last_name": "Neri",
    "password": "secret123",
    "confirm_password": "secret123",
}


class TestAuthAPI:
    """Test cases for auth API endpoints."""

    @pytest.mark.asyncio
    async def test_register_success(self, test_client_with_db):
        """Test registering normalizes the callsign and opens a session."""
        response = await test_client_with_db.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["is_staff"] is False
        assert data["user"]["callsign"] == "ASX010"
        assert data["user"]["email"] == "giulia@example.com"
        assert "password_hash" not in data["user"]

    @pytest.mark.asyncio
    async def test_register_invalid_callsign(self, test_client_with_db):
        response = await test_client_with_db.post(
            "/api/auth/register", json={**REGISTRATION, "callsign": "ABC010"}
        )

        assert response.status_code == 422
        data = response.json()
        assert data["type"] == "ContestValidationError"
        assert "ASX" in data["info"]

    @pytest.mark.asyncio
    async def test_register_password_mismatch(self, test_client_with_db):
        response = await test_client_with_db.post(
            "/api/auth/register", json={**REGISTRATION, "confirm_password": "different1"}
        )

        assert response.status_code == 422
        assert response.json()["info"] == "Le password non coincidono"

    @pytest.mark.asyncio
    async def test_register_blank_names(self, test_client_with_db):
        response = await test_client_with_db.post(
            "/api/auth/register", json={**REGISTRATION, "first_name": "   ", "last_name": "  "}
        )

        assert response.status_code == 422
        assert response.json()["info"] == "Inserisci nome e cognome"

    @pytest.mark.asyncio
    async def test_register_missing_fields(self, test_client_with_db):
        response = await test_client_with_db.post("/api/auth/register", json={"email": "x@example.com"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_register_duplicate_callsign(self, test_client_with_db):
        await test_client_with_db.post("/api/auth/register", json=REGISTRATION)
        response = await test_client_with_db.post(
            "/api/auth/register", json={**REGISTRATION, "email": "other@example.com"}
        )

        assert response.status_code == 409
        assert response.json()["type"] == "ConflictError"

    @pytest.mark.asyncio
    async def test_login_and_session(self, test_client_with_db):
        await test_client_with_db.post("/api/auth/register", json=REGISTRATION)

        login = await test_client_with_db.post(
            "/api/auth/login", json={"email": "giulia@example.com", "password": "secret123"}
        )
        assert login.status_code == 200
        token = login.json()["access_token"]

        session = await test_client_with_db.get(
            "/api/auth/session", headers={"Authorization": f"Bearer {token}"}
        )
        assert session.status_code == 200
        assert session.json()["user"]["callsign"] == "ASX010"
        assert session.json()["is_staff"] is False

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client_with_db):
        await test_client_with_db.post("/api/auth/register", json=REGISTRATION)

        response = await test_client_with_db.post(
            "/api/auth/login", json={"email": "giulia@example.com", "password": "wrong-pass"}
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_anonymous_session(self, test_client_with_db):
        response = await test_client_with_db.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json() == {"user": None, "is_staff": False}

    @pytest.mark.asyncio
    async def test_invalid_token_rejected(self, test_client_with_db):
        response = await test_client_with_db.get(
            "/api/auth/session", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self, test_client_with_db):
        register = await test_client_with_db.post("/api/auth/register", json=REGISTRATION)
        headers = {"Authorization": f"Bearer {register.json()['access_token']}"}

        logout = await test_client_with_db.post("/api/auth/logout", headers=headers)
        assert logout.status_code == 204

        response = await test_client_with_db.get("/api/users/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["type"] == "UnauthorizedError"

    @pytest.mark.asyncio
    async def test_staff_login_disabled_without_passphrase(self, test_client_with_db, monkeypatch):
        monkeypatch.setattr(security.settings, "staff_passphrase", None)

        response = await test_client_with_db.post("/api/auth/staff-login", json={"passphrase": "anything"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_staff_login_with_passphrase(self, test_client_with_db, monkeypatch):
        monkeypatch.setattr(security.settings, "staff_passphrase", "hangar-door")

        response = await test_client_with_db.post("/api/auth/staff-login", json={"passphrase": "hangar-door"})
        assert response.status_code == 200
        data = response.json()
        assert data["is_staff"] is True
        assert data["user"] is None

        headers = {"Authorization": f"Bearer {data['access_token']}"}
        pending = await test_client_with_db.get("/api/staff/photos/pending", headers=headers)
        assert pending.status_code == 200

        # Staff passphrase sessions have no pilot account to upload or vote with
        me = await test_client_with_db.get("/api/users/me", headers=headers)
        assert me.status_code == 401
