"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import JobType, Profile, ProfileRole
from domain.services.profile_completion import REQUIRED_FIELDS
from infrastructure.database.models import ProfileModel, SwipeModel

# Columns copied verbatim between entity and model
_FIELDS = (
    "id",
    "user_id",
    "name",
    "position",
    "required_position",
    "description",
    "city",
    "preferred_area",
    "radius_km",
    "experience_years",
    "availability_hours",
    "availability_date",
    "salary_min",
    "salary_max",
    "avatar_url",
    "created_at",
    "updated_at",
)


def _required_filled(role: ProfileRole) -> list[ColumnElement[bool]]:
    """SQL form of the required-field rule: every required text column non-blank."""
    conditions: list[ColumnElement[bool]] = []
    for name in REQUIRED_FIELDS[role]:
        column = getattr(ProfileModel, name)
        conditions.append(column.is_not(None))
        conditions.append(func.trim(column) != "")
    return conditions


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by an auth user."""
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Get several profiles in a single query, keyed by ID."""
        if not ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.id.in_(ids))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def lock_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Load profiles with ``SELECT ... FOR UPDATE``, locking rows in id order.

        The locks serialize concurrent swipes on the same pair until commit.
        SQLite ignores the clause; its writers are serialized anyway.
        """
        if not ids:
            return {}
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.id.in_(ids))
            .order_by(ProfileModel.id)
            .with_for_update()
        )
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def list_candidates(
        self,
        viewer_id: UUID,
        role: ProfileRole,
        limit: int,
    ) -> list[Profile]:
        """Complete profiles of ``role`` the viewer has not swiped on, oldest first."""
        decided = select(SwipeModel.id).where(
            SwipeModel.from_profile_id == viewer_id,
            SwipeModel.to_profile_id == ProfileModel.id,
        )
        stmt = (
            select(ProfileModel)
            .where(
                ProfileModel.role == role.value,
                ProfileModel.id != viewer_id,
                ~decided.exists(),
                *_required_filled(role),
            )
            .order_by(ProfileModel.created_at, ProfileModel.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile (role and owner are immutable)."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        for name in _FIELDS:
            if name in ("id", "user_id", "created_at"):
                continue
            setattr(model, name, getattr(profile, name))
        model.availability_days = (
            list(profile.availability_days) if profile.availability_days is not None else None
        )
        model.job_type = profile.job_type.value if profile.job_type else None

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            role=ProfileRole(model.role),
            job_type=JobType(model.job_type) if model.job_type else None,
            availability_days=list(model.availability_days)
            if model.availability_days is not None
            else None,
            **{name: getattr(model, name) for name in _FIELDS},
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            role=entity.role.value,
            job_type=entity.job_type.value if entity.job_type else None,
            availability_days=list(entity.availability_days)
            if entity.availability_days is not None
            else None,
            **{name: getattr(entity, name) for name in _FIELDS},
        )
