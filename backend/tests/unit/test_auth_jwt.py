"""Unit tests for JWT token generation and validation

Tests cover:
- Token creation with valid claims
- Token decoding and validation
- Token expiration handling
- Invalid token handling
- Environment configuration
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from auth.jwt import create_access_token, decode_token
from config import get_settings
from infrastructure.identity.jwt_identity_provider import JWTIdentityProvider

TEST_SECRET = "test-secret-key-256-bits-minimum-length-required-for-security"


@pytest.fixture(autouse=True)
def jwt_settings(monkeypatch):
    """Reload settings around each test so env changes take effect"""
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("JWT_EXPIRY_MINUTES", "60")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestCreateAccessToken:
    """Test JWT token creation"""

    def test_create_token_with_valid_claims(self):
        """Test creating token with all claims"""
        token = create_access_token(user_id="u1", email="owner@test.com")

        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["sub"] == "u1"
        assert payload["email"] == "owner@test.com"
        assert payload["exp"] - payload["iat"] == 3600

    def test_create_token_without_email(self):
        token = create_access_token(user_id="u1")

        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert "email" not in payload

    def test_missing_secret_raises(self, monkeypatch):
        """Test token creation fails without JWT_SECRET"""
        monkeypatch.setenv("JWT_SECRET", "")
        get_settings.cache_clear()

        with pytest.raises(ValueError, match="JWT_SECRET"):
            create_access_token(user_id="u1")


class TestDecodeToken:
    """Test JWT token decoding"""

    def test_round_trip(self):
        payload = decode_token(create_access_token(user_id="owner-42"))

        assert payload["sub"] == "owner-42"

    def test_expired_token_raises(self):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "u1", "iat": int(past.timestamp()), "exp": int((past + timedelta(minutes=1)).timestamp())},
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token)

    def test_wrong_signature_raises(self):
        token = jwt.encode({"sub": "u1"}, "another-secret-key-that-is-long-enough-for-hs256", algorithm="HS256")

        with pytest.raises(jwt.InvalidTokenError):
            decode_token(token)

    def test_garbage_token_raises(self):
        with pytest.raises(jwt.InvalidTokenError):
            decode_token("not.a.jwt")


class TestJWTIdentityProvider:
    """Test identity extraction from decoded claims"""

    def test_current_user_id(self):
        identity = JWTIdentityProvider({"sub": "u1", "email": "owner@test.com"})

        assert identity.current_user_id() == "u1"

    def test_missing_subject_rejected(self):
        with pytest.raises(ValueError):
            JWTIdentityProvider({"email": "owner@test.com"})
