"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import StoreUnavailableError
from infrastructure.database.repositories.sqlalchemy_match_repo import SQLAlchemyMatchRepository
from infrastructure.database.repositories.sqlalchemy_message_repo import (
    SQLAlchemyMessageRepository,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.repositories.sqlalchemy_swipe_repo import SQLAlchemySwipeRepository

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self._require_session())

    @property
    def swipes(self) -> SQLAlchemySwipeRepository:
        """Get swipe decision repository."""
        return SQLAlchemySwipeRepository(self._require_session())

    @property
    def matches(self) -> SQLAlchemyMatchRepository:
        """Get match repository."""
        return SQLAlchemyMatchRepository(self._require_session())

    @property
    def messages(self) -> SQLAlchemyMessageRepository:
        """Get message repository."""
        return SQLAlchemyMessageRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction.

        A lost connection surfaces as StoreUnavailableError; nothing of the
        transaction is kept.
        """
        if not self._session:
            return
        try:
            await self._session.commit()
        except OperationalError as exc:
            logger.error("store_commit_failed", error=str(exc.orig or exc))
            await self.rollback()
            raise StoreUnavailableError() from exc

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
