"""Tests for auth dependencies — get_current_user edge cases."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from hoteldesk.auth.jwt import create_access_token
from hoteldesk.models.user import User

pytestmark = pytest.mark.asyncio


class TestGetCurrentUser:
    """Test get_current_user via the /profile endpoint."""

    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/auth/profile")
        assert response.status_code == 401

    async def test_expired_token_rejected(self, client: AsyncClient, admin_user: User):
        token = create_access_token({"sub": str(admin_user.id)}, expires_delta=timedelta(seconds=-1))
        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_invalid_token_format(self, client: AsyncClient):
        response = await client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.valid.jwt"})
        assert response.status_code == 401

    async def test_non_numeric_subject_rejected(self, client: AsyncClient):
        token = create_access_token({"sub": "admin"})
        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_nonexistent_user_id_rejected(self, client: AsyncClient):
        token = create_access_token({"sub": "4242"})
        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_inactive_user_forbidden(self, client: AsyncClient, db_session: AsyncSession, admin_user: User):
        admin_user.is_active = False
        await db_session.commit()

        token = create_access_token({"sub": str(admin_user.id)})
        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403
