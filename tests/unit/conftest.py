"""Shared fixtures for unit tests."""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import Profile, ProfileRole


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.swipes = AsyncMock()
        self.matches = AsyncMock()
        self.messages = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


_EPOCH = datetime(2026, 1, 1, 9, 0, 0)


def make_worker(complete: bool = True, offset: int = 0, **overrides: Any) -> Profile:
    """Worker profile; ``offset`` spaces out created_at for ordering tests."""
    fields: dict[str, Any] = {"name": "Dana Levi", "user_id": uuid4()}
    if complete:
        fields.update(position="Dental assistant", preferred_area="Tel Aviv")
    fields.update(overrides)
    created = _EPOCH + timedelta(minutes=offset)
    return Profile(
        role=ProfileRole.WORKER,
        created_at=created,
        updated_at=created,
        **fields,
    )


def make_clinic(complete: bool = True, offset: int = 0, **overrides: Any) -> Profile:
    """Clinic profile; ``offset`` spaces out created_at for ordering tests."""
    fields: dict[str, Any] = {"name": "Smile Clinic", "user_id": uuid4()}
    if complete:
        fields.update(required_position="Dental assistant", city="Tel Aviv")
    fields.update(overrides)
    created = _EPOCH + timedelta(minutes=offset)
    return Profile(
        role=ProfileRole.CLINIC,
        created_at=created,
        updated_at=created,
        **fields,
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random auth user ID."""
    return uuid4()


@pytest.fixture
def worker() -> Profile:
    return make_worker()


@pytest.fixture
def clinic() -> Profile:
    return make_clinic()
