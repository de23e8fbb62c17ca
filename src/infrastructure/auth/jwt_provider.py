"""JWT authentication provider.

Supabase signs session tokens with ES256; the public keys are served from the
project's JWKS endpoint. Locally created tokens (tests, scripts) use HS256 with
the shared secret from settings.

Only ``sub`` is read from the payload, plus ``email`` and ``role`` when present.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import ExpiredSignatureError, JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWKSCache:
    """kid -> JWK mapping fetched lazily from the issuer."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self._url = url
        self._timeout = timeout
        self._keys: dict[str, dict[str, Any]] | None = None

    def invalidate(self) -> None:
        self._keys = None

    async def get(self, kid: str) -> dict[str, Any] | None:
        """Look a key up, refetching once on a miss (key rotation)."""
        keys = await self._load()
        if kid not in keys:
            self.invalidate()
            keys = await self._load()
        return keys.get(kid)

    async def _load(self) -> dict[str, dict[str, Any]]:
        if self._keys is not None:
            return self._keys
        if not self._url:
            return {}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self._url, timeout=self._timeout)
                response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to fetch JWKS from %s", self._url)
            return {}

        self._keys = {
            key["kid"]: key for key in response.json().get("keys", []) if key.get("kid")
        }
        logger.info("Fetched %d JWKS keys", len(self._keys))
        return self._keys


class JWTAuthProvider:
    """Validates Supabase (ES256) and local (HS256) bearer tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks: JWKSCache | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks = jwks or JWKSCache(settings.supabase_jwks_url)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the auth subject.

        Returns:
            TokenUser if valid, None if the token is malformed, badly signed
            or has no usable subject

        Raises:
            AuthenticationError: TOKEN_EXPIRED when the signature is valid but
            the token has expired
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except ExpiredSignatureError:
            raise AuthenticationError(
                message="Token has expired",
                error_code=ErrorCode.TOKEN_EXPIRED,
            ) from None
        except JWTError:
            return None

        if payload is None:
            return None
        return self._to_user(payload)

    async def _decode_es256(self, token: str, header: dict) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = await self._jwks.get(kid)
        if not key_data:
            logger.warning("JWKS key not found for kid=%s", kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    @staticmethod
    def _to_user(payload: dict) -> Optional[TokenUser]:
        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError:
            return None
        return TokenUser(id=user_id, email=payload.get("email"), role=payload.get("role"))

    def create_token(self, user: TokenUser, expires_in: timedelta | None = None) -> str:
        """Create an HS256 token for a user (tests and local scripts)."""
        expire = datetime.utcnow() + (expires_in or timedelta(minutes=self._expire_minutes))
        payload: dict = {
            "sub": str(user.id),
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": expire,
        }
        if user.email:
            payload["email"] = user.email
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
