"""SQLAlchemy implementation of Match repository."""

from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.match import Match, canonical_pair
from infrastructure.database.models import MatchModel


class SQLAlchemyMatchRepository:
    """SQLAlchemy implementation of IMatchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Match | None:
        """Get a match by ID."""
        stmt = select(MatchModel).where(MatchModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_between(self, first: UUID, second: UUID) -> Match | None:
        """Get the match for an unordered pair of profiles."""
        profile_a_id, profile_b_id = canonical_pair(first, second)
        stmt = select(MatchModel).where(
            MatchModel.profile_a_id == profile_a_id,
            MatchModel.profile_b_id == profile_b_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_for_profile(self, profile_id: UUID) -> list[Match]:
        """Get all matches of a profile, newest first."""
        stmt = (
            select(MatchModel)
            .where(
                or_(
                    MatchModel.profile_a_id == profile_id,
                    MatchModel.profile_b_id == profile_id,
                )
            )
            .order_by(MatchModel.created_at.desc(), MatchModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, match: Match) -> Match:
        """Create a new match. The unique pair constraint rejects duplicates."""
        model = self._to_model(match)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def close_if_open(self, match: Match) -> Match:
        """Mark a match closed unless it already is; return the stored state.

        The ``is_closed = false`` guard makes the first committed closer win,
        so a concurrent close never overwrites ``closed_by``.
        """
        stmt = (
            update(MatchModel)
            .where(MatchModel.id == match.id, MatchModel.is_closed.is_(False))
            .values(
                is_closed=True,
                closed_by=match.closed_by,
                updated_at=match.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

        stored = (
            select(MatchModel)
            .where(MatchModel.id == match.id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stored)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Match {match.id} not found")
        return self._to_entity(model)

    def _to_entity(self, model: MatchModel) -> Match:
        """Convert ORM model to domain entity."""
        return Match(
            id=model.id,
            profile_a_id=model.profile_a_id,
            profile_b_id=model.profile_b_id,
            is_closed=model.is_closed,
            closed_by=model.closed_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Match) -> MatchModel:
        """Convert domain entity to ORM model."""
        return MatchModel(
            id=entity.id,
            profile_a_id=entity.profile_a_id,
            profile_b_id=entity.profile_b_id,
            is_closed=entity.is_closed,
            closed_by=entity.closed_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
