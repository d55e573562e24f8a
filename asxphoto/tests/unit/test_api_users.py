"""Unit tests for users API endpoints."""

import pytest

from asxphoto.app.services.accounts import AccountService


class TestUsersAPI:
    """Test cases for the pilot profile and quota endpoints."""

    @pytest.mark.asyncio
    async def test_get_me(self, test_client_with_db, make_user, auth_headers):
        user = await make_user(callsign="ASX777")

        response = await test_client_with_db.get("/api/users/me", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["callsign"] == "ASX777"

    @pytest.mark.asyncio
    async def test_get_me_requires_login(self, test_client_with_db):
        response = await test_client_with_db.get("/api/users/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update_profile(self, test_client_with_db, make_user, auth_headers):
        user = await make_user(first_name="Paolo", last_name="Gialli")

        response = await test_client_with_db.patch(
            "/api/users/me",
            json={"callsign": "asx555"},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["callsign"] == "ASX555"
        assert data["first_name"] == "Paolo"

    @pytest.mark.asyncio
    async def test_update_profile_blank_name(self, test_client_with_db, make_user, auth_headers):
        user = await make_user(first_name="Paolo")
        headers = auth_headers(user)

        response = await test_client_with_db.patch("/api/users/me", json={"first_name": "   "}, headers=headers)
        assert response.status_code == 422

        me = await test_client_with_db.get("/api/users/me", headers=headers)
        assert me.json()["first_name"] == "Paolo"

    @pytest.mark.asyncio
    async def test_profile_cannot_grant_staff(self, test_client_with_db, make_user, auth_headers):
        user = await make_user()

        response = await test_client_with_db.patch(
            "/api/users/me",
            json={"first_name": "Ugo", "is_staff": True},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["is_staff"] is False

    @pytest.mark.asyncio
    async def test_quota_for_new_pilot(self, test_client_with_db, make_user, auth_headers):
        user = await make_user()

        response = await test_client_with_db.get("/api/users/me/quota", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["upload_count"] == 0
        assert data["upload_limit"] == 3
        assert data["votes_used"] == 0
        assert data["vote_limit"] == 3
        assert data["remaining_uploads"] == 3
        assert data["remaining_votes"] == 3
        assert data["can_upload"] is True

    @pytest.mark.asyncio
    async def test_deleted_account_token_rejected(
        self, test_client_with_db, make_user, auth_headers, test_db, storage
    ):
        user = await make_user()
        headers = auth_headers(user)
        await AccountService(test_db).delete_user(user.id, storage)

        response = await test_client_with_db.get("/api/users/me", headers=headers)
        assert response.status_code == 401
