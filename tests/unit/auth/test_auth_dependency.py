"""Unit tests for authentication dependencies."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from api.dependencies.auth import get_current_user, get_synced_user
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.user import User
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret", algorithm="HS256", expire_minutes=30, jwks_url=""
    )


@pytest.fixture
def token_user() -> TokenUser:
    return TokenUser(id=uuid4(), email="ada@example.com")


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_valid_token_returns_user(
        self, provider: JWTAuthProvider, token_user: TokenUser
    ) -> None:
        token = provider.create_token(token_user)

        user = await get_current_user(_credentials(token), provider)

        assert user.id == token_user.id
        assert user.email == token_user.email

    @pytest.mark.asyncio
    async def test_missing_credentials_raises_unauthorized(
        self, provider: JWTAuthProvider
    ) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None, provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_garbage_token_raises_invalid_token(self, provider: JWTAuthProvider) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_credentials("not-a-jwt"), provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_expired_token_raises_invalid_token(
        self, provider: JWTAuthProvider, token_user: TokenUser
    ) -> None:
        token = jwt.encode(
            {
                "sub": str(token_user.id),
                "email": token_user.email,
                "exp": datetime.utcnow() - timedelta(minutes=5),
            },
            "test-secret",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(_credentials(token), provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN


class TestGetSyncedUser:
    @pytest.mark.asyncio
    async def test_syncs_identity_into_store(self, token_user: TokenUser) -> None:
        service = AsyncMock()
        service.sync.return_value = User(id=token_user.id, email=token_user.email)

        user = await get_synced_user(token_user, service)

        assert user is token_user
        service.sync.assert_awaited_once_with(token_user.id, token_user.email, None)

    @pytest.mark.asyncio
    async def test_fills_display_name_from_store(self, token_user: TokenUser) -> None:
        service = AsyncMock()
        service.sync.return_value = User(
            id=token_user.id, email=token_user.email, display_name="Ada"
        )

        user = await get_synced_user(token_user, service)

        assert user.display_name == "Ada"
