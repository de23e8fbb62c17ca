"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite://"

TEST_SECRET_KEY = "test-secret-key"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test; StaticPool keeps the one connection alive."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def make_user() -> Callable[..., TokenUser]:
    """Factory for distinct auth subjects."""

    def _make(email: str | None = None) -> TokenUser:
        user_id = uuid4()
        return TokenUser(id=user_id, email=email or f"{user_id.hex[:8]}@example.com")

    return _make


@pytest.fixture
def auth_headers_for(
    auth_provider: JWTAuthProvider,
) -> Callable[[TokenUser], dict[str, str]]:
    """Build an Authorization header carrying a real HS256 token."""

    def _headers(user: TokenUser) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(user)}"}

    return _headers


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Application wired to the in-memory database.

    Tokens are still validated for real, so several users can act in one test
    simply by sending different Authorization headers.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_discovery_service,
        get_match_service,
        get_message_service,
        get_profile_service,
        get_swipe_service,
    )
    from domain.services.discovery_service import DiscoveryService
    from domain.services.match_service import MatchService
    from domain.services.message_service import MessageService
    from domain.services.profile_service import ProfileService
    from domain.services.swipe_service import SwipeService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(test_uow_factory)
    app.dependency_overrides[get_discovery_service] = lambda: DiscoveryService(
        test_uow_factory, page_size=20
    )
    app.dependency_overrides[get_swipe_service] = lambda: SwipeService(test_uow_factory)
    app.dependency_overrides[get_match_service] = lambda: MatchService(test_uow_factory)
    app.dependency_overrides[get_message_service] = lambda: MessageService(test_uow_factory)
    return app


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client for the database-backed app. Pass auth headers per request."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


# Minimal field sets that satisfy the required-field rule of each role
COMPLETE_WORKER = {
    "role": "worker",
    "name": "Dana Levi",
    "position": "Dental assistant",
    "preferred_area": "Tel Aviv",
}
COMPLETE_CLINIC = {
    "role": "clinic",
    "name": "Smile Clinic",
    "required_position": "Dental assistant",
    "city": "Tel Aviv",
}


@pytest.fixture
def register(
    api_client: AsyncClient,
    make_user: Callable[..., TokenUser],
    auth_headers_for: Callable[[TokenUser], dict[str, str]],
) -> Callable[..., Any]:
    """Register a fresh user with a profile; returns (headers, profile_json).

    Call as ``register(COMPLETE_WORKER, name="Other")``: keyword overrides are
    merged over the base body.
    """

    async def _register(
        base: dict[str, Any] | None = None, **overrides: Any
    ) -> tuple[dict[str, str], dict[str, Any]]:
        headers = auth_headers_for(make_user())
        body = {**(base or {}), **overrides}
        response = await api_client.post("/api/v1/profiles", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return headers, response.json()["data"]

    return _register
