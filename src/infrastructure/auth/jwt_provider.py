"""JWT authentication provider.

Tokens signed with the shared secret (HS256 by default) are verified
locally. ES256 tokens are verified against the public keys published at
``settings.jwks_url``; the key set is fetched lazily and refetched once
when an unknown ``kid`` shows up, to follow key rotation.

Expected claims::

    {"sub": "<user uuid>", "email": "user@example.com", "name": "Ada", "exp": ...}
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
import structlog
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """JWT-based implementation of IAuthProvider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks_url: str = settings.jwks_url,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks_url = jwks_url
        self._jwks: dict[str, dict[str, Any]] | None = None

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header.get("kid"))
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError as exc:
            logger.info("token_rejected", reason=str(exc))
            return None

        if payload is None:
            return None
        return self._to_user(payload)

    def create_token(self, user: TokenUser) -> str:
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "exp": expire,
        }
        if user.display_name:
            payload["name"] = user.display_name
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    @staticmethod
    def _to_user(payload: dict[str, Any]) -> Optional[TokenUser]:
        subject = payload.get("sub")
        email = payload.get("email")
        if not subject or not email:
            return None
        try:
            user_id = UUID(subject)
        except ValueError:
            return None
        metadata = payload.get("user_metadata") or {}
        display_name = payload.get("name") or metadata.get("display_name")
        return TokenUser(id=user_id, email=email, display_name=display_name)

    async def _decode_es256(self, token: str, kid: str | None) -> Optional[dict[str, Any]]:
        if not kid:
            return None
        key_data = (await self._keys()).get(kid)
        if key_data is None:
            # Unknown kid: the provider may have rotated its keys.
            self._jwks = None
            key_data = (await self._keys()).get(kid)
            if key_data is None:
                logger.warning("jwks_key_not_found", kid=kid)
                return None
        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    async def _keys(self) -> dict[str, dict[str, Any]]:
        if self._jwks is not None:
            return self._jwks
        if not self._jwks_url:
            return {}
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self._jwks_url, timeout=10.0)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("jwks_fetch_failed", url=self._jwks_url, error=str(exc))
            return {}
        self._jwks = {
            key["kid"]: key for key in response.json().get("keys", []) if key.get("kid")
        }
        logger.info("jwks_fetched", keys=len(self._jwks))
        return self._jwks
