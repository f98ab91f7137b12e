"""Unit tests for access token signing and verification."""
from datetime import timedelta

import jwt
import pytest

from music_commerce.errors import UnauthorizedError
from music_commerce.settings import Settings
from music_commerce.tokens import create_access_token, read_access_token


@pytest.fixture
def settings():
    return Settings(jwt_secret="unit-test-secret", access_token_expire_minutes=5)


class TestAccessTokens:

    def test_round_trip(self, settings):
        token = create_access_token("a" * 24, settings)
        assert read_access_token(token, settings) == "a" * 24

    def test_expired_token_rejected(self, settings):
        token = create_access_token("a" * 24, settings, expires_in=timedelta(seconds=-1))
        with pytest.raises(UnauthorizedError):
            read_access_token(token, settings)

    def test_wrong_secret_rejected(self, settings):
        token = create_access_token("a" * 24, settings)
        other = Settings(jwt_secret="another-secret")
        with pytest.raises(UnauthorizedError):
            read_access_token(token, other)

    def test_garbage_rejected(self, settings):
        with pytest.raises(UnauthorizedError):
            read_access_token("not.a.token", settings)

    def test_wrong_token_type_rejected(self, settings):
        token = jwt.encode(
            {"sub": "a" * 24, "exp": 9999999999, "type": "refresh"},
            "unit-test-secret",
            algorithm="HS256",
        )
        with pytest.raises(UnauthorizedError):
            read_access_token(token, settings)
