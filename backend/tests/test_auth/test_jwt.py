"""Unit tests for JWT token creation and decoding."""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from hoteldesk.auth.jwt import create_access_token, create_user_token, decode_token
from hoteldesk.models.user import Role, User


class TestCreateAccessToken:
    """Test access token creation."""

    def test_contains_standard_claims(self):
        payload = decode_token(create_access_token({"sub": "7"}))
        assert payload["type"] == "access"
        assert payload["sub"] == "7"
        assert "iat" in payload
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "7"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "7", "type": "access"}, "some-other-secret", algorithm="HS256")
        with pytest.raises(JWTError):
            decode_token(token)


class TestCreateUserToken:
    def test_admin_claims(self):
        user = User(id=1, name="Admin", email="admin@hotel.com", hashed_password="x", role=Role.ADMIN)
        payload = decode_token(create_user_token(user))
        assert payload["sub"] == "1"
        assert payload["role"] == "admin"
        assert "staff_id" not in payload

    def test_staff_claims_include_staff_id(self):
        user = User(id=5, name="Ravi", email="staff3@hotel.com", hashed_password="x", role=Role.STAFF, staff_id=3)
        payload = decode_token(create_user_token(user))
        assert payload["role"] == "staff"
        assert payload["staff_id"] == 3
