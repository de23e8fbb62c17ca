"""Unit tests for JWTAuthProvider and the JWKS cache."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from jose import jwk
from jose import jwt as jose_jwt

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import JWKSCache, JWTAuthProvider
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://example.supabase.co/auth/v1/.well-known/jwks.json"


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _mock_http_client(response: MagicMock | None = None, error: Exception | None = None) -> AsyncMock:
    client = AsyncMock()
    if error is not None:
        client.get.side_effect = error
    else:
        client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def _jwks_response(keys: list[dict]) -> MagicMock:
    response = MagicMock()
    response.json.return_value = {"keys": keys}
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def hs256_provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret",
        algorithm="HS256",
        expire_minutes=30,
        jwks=JWKSCache(""),
    )


class TestHS256Tokens:
    async def test_round_trips_subject_email_and_role(self, hs256_provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="dana@example.com")

        result = await hs256_provider.validate_token(hs256_provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.email == "dana@example.com"
        assert result.role == "authenticated"

    async def test_email_is_optional(self, hs256_provider: JWTAuthProvider):
        """Phone sign-ups carry no email claim."""
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999})

        result = await hs256_provider.validate_token(token)

        assert result is not None
        assert result.email is None

    async def test_returns_none_without_subject(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"email": "user@example.com", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_returns_none_for_non_uuid_subject(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "not-a-uuid", "exp": 9999999999})

        assert await hs256_provider.validate_token(token) is None

    async def test_returns_none_for_wrong_secret(self, hs256_provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": str(uuid4()), "exp": 9999999999}, secret="other")

        assert await hs256_provider.validate_token(token) is None

    async def test_returns_none_for_garbage(self, hs256_provider: JWTAuthProvider):
        assert await hs256_provider.validate_token("not.a.jwt") is None

    async def test_expired_token_raises_token_expired(self, hs256_provider: JWTAuthProvider):
        token = hs256_provider.create_token(
            TokenUser(id=uuid4()), expires_in=timedelta(minutes=-5)
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await hs256_provider.validate_token(token)

        assert exc_info.value.error_code == ErrorCode.TOKEN_EXPIRED


class TestES256Tokens:
    @pytest.fixture
    def signing_key(self) -> tuple[str, dict]:
        """A fresh P-256 key pair: private PEM for signing, public JWK for the cache."""
        private_key = ec.generate_private_key(ec.SECP256R1())
        private_pem = private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        ).decode()
        public_pem = private_key.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode()
        public_jwk = jwk.construct(public_pem, "ES256").to_dict()
        public_jwk["kid"] = "k1"
        return private_pem, public_jwk

    async def test_validates_token_signed_with_jwks_key(self, signing_key: tuple[str, dict]):
        private_pem, public_jwk = signing_key
        jwks = MagicMock()
        jwks.get = AsyncMock(return_value=public_jwk)
        provider = JWTAuthProvider(secret_key="unused", jwks=jwks)
        user_id = uuid4()
        token = jose_jwt.encode(
            {"sub": str(user_id), "role": "authenticated", "exp": 9999999999},
            private_pem,
            algorithm="ES256",
            headers={"kid": "k1"},
        )

        result = await provider.validate_token(token)

        assert result is not None
        assert result.id == user_id
        jwks.get.assert_awaited_once_with("k1")

    async def test_returns_none_when_kid_unknown(self, signing_key: tuple[str, dict]):
        private_pem, _ = signing_key
        jwks = MagicMock()
        jwks.get = AsyncMock(return_value=None)
        provider = JWTAuthProvider(secret_key="unused", jwks=jwks)
        token = jose_jwt.encode(
            {"sub": str(uuid4()), "exp": 9999999999},
            private_pem,
            algorithm="ES256",
            headers={"kid": "rotated-away"},
        )

        assert await provider.validate_token(token) is None

    async def test_returns_none_without_kid(self, signing_key: tuple[str, dict]):
        private_pem, _ = signing_key
        jwks = MagicMock()
        jwks.get = AsyncMock()
        provider = JWTAuthProvider(secret_key="unused", jwks=jwks)
        token = jose_jwt.encode({"sub": str(uuid4())}, private_pem, algorithm="ES256")

        assert await provider.validate_token(token) is None
        jwks.get.assert_not_awaited()


class TestJWKSCache:
    async def test_empty_url_yields_no_keys(self):
        cache = JWKSCache("")

        assert await cache.get("any") is None

    async def test_fetches_once_and_caches(self):
        client = _mock_http_client(
            _jwks_response(
                [
                    {"kid": "key-1", "kty": "EC"},
                    {"kty": "EC"},  # no kid, skipped
                ]
            )
        )
        cache = JWKSCache(JWKS_URL)

        with patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client):
            first = await cache.get("key-1")
            second = await cache.get("key-1")

        assert first == {"kid": "key-1", "kty": "EC"}
        assert second == first
        client.get.assert_awaited_once()

    async def test_refetches_once_on_unknown_kid(self):
        """Key rotation: a miss invalidates the cache and retries."""
        client = _mock_http_client(_jwks_response([{"kid": "old", "kty": "EC"}]))
        cache = JWKSCache(JWKS_URL)

        with patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client):
            result = await cache.get("new")

        assert result is None
        assert client.get.await_count == 2

    async def test_http_error_yields_no_keys(self):
        client = _mock_http_client(error=httpx.ConnectError("Connection refused"))
        cache = JWKSCache(JWKS_URL)

        with patch.object(jwt_provider_module.httpx, "AsyncClient", return_value=client):
            assert await cache.get("key-1") is None
