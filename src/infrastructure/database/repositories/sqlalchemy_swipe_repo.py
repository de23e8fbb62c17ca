"""SQLAlchemy implementation of SwipeDecision repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.swipe import SwipeDecision, SwipeType
from infrastructure.database.models import SwipeModel


class SQLAlchemySwipeRepository:
    """SQLAlchemy implementation of ISwipeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, from_profile_id: UUID, to_profile_id: UUID) -> SwipeDecision | None:
        """Get the live decision for an ordered pair."""
        model = await self._get_model(from_profile_id, to_profile_id)
        return self._to_entity(model) if model else None

    async def upsert(self, decision: SwipeDecision) -> SwipeDecision:
        """Insert a decision, or overwrite the one already stored for the pair."""
        model = await self._get_model(decision.from_profile_id, decision.to_profile_id)
        if model:
            # Last write wins; the row keeps its original id
            model.type = decision.type.value
            model.created_at = decision.created_at
        else:
            model = self._to_model(decision)
            self._session.add(model)

        await self._session.flush()
        return self._to_entity(model)

    async def _get_model(self, from_profile_id: UUID, to_profile_id: UUID) -> SwipeModel | None:
        stmt = select(SwipeModel).where(
            SwipeModel.from_profile_id == from_profile_id,
            SwipeModel.to_profile_id == to_profile_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: SwipeModel) -> SwipeDecision:
        """Convert ORM model to domain entity."""
        return SwipeDecision(
            id=model.id,
            from_profile_id=model.from_profile_id,
            to_profile_id=model.to_profile_id,
            type=SwipeType(model.type),
            created_at=model.created_at,
        )

    def _to_model(self, entity: SwipeDecision) -> SwipeModel:
        """Convert domain entity to ORM model."""
        return SwipeModel(
            id=entity.id,
            from_profile_id=entity.from_profile_id,
            to_profile_id=entity.to_profile_id,
            type=entity.type.value,
            created_at=entity.created_at,
        )
