"""Profile service layer with business logic."""

from collections.abc import Callable
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import (
    AuthenticationError,
    ErrorCode,
    InvalidProfileError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
)
from domain.entities.profile import (
    DESCRIPTION_MAX_LENGTH,
    WEEKDAYS,
    JobType,
    Profile,
    ProfileRole,
)
from domain.entities.session import ViewerSession
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_completion import ProfileCompletion, evaluate

logger = structlog.get_logger()

# Fields a profile owner may set on create or change on update (role is immutable)
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "position",
        "required_position",
        "description",
        "city",
        "preferred_area",
        "radius_km",
        "experience_years",
        "availability_days",
        "availability_hours",
        "availability_date",
        "salary_min",
        "salary_max",
        "job_type",
        "avatar_url",
    }
)

_NON_NEGATIVE_FIELDS = ("radius_km", "experience_years", "salary_min", "salary_max")


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(
        self,
        user_id: UUID,
        role: ProfileRole,
        name: str,
        **fields: Any,
    ) -> Profile:
        """Register the profile of an authenticated user. One profile per user."""
        self._reject_unknown_fields(fields)
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get_by_user_id(user_id)
            if existing:
                raise ProfileAlreadyExistsError(str(user_id))

            profile = Profile(user_id=user_id, role=role, name=name, **fields)
            self._normalize(profile)
            self._validate(profile)

            created = await uow.profiles.create(profile)
            await uow.commit()

        logger.info(
            "profile_created",
            profile_id=str(created.id),
            role=created.role.value,
        )
        return created

    async def get(self, profile_id: UUID) -> Profile:
        """Get a profile by ID."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            return profile

    async def get_for_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user, if they registered one."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_user_id(user_id)

    async def update(self, profile_id: UUID, **changes: Any) -> Profile:
        """Apply a partial update. Unset fields keep their current value."""
        if "role" in changes:
            raise InvalidProfileError("Profile role cannot be changed", "role")
        self._reject_unknown_fields(changes)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))

            for name, value in changes.items():
                setattr(profile, name, value)
            self._normalize(profile)
            self._validate(profile)
            profile.touch()

            updated = await uow.profiles.update(profile)
            await uow.commit()
            return updated

    async def get_completion(self, profile_id: UUID) -> ProfileCompletion:
        """Evaluate how complete a stored profile is."""
        profile = await self.get(profile_id)
        return evaluate(profile)

    async def get_completion_for_user(self, user_id: UUID) -> ProfileCompletion:
        """Completion of the user's own profile; an unregistered user scores zero."""
        return evaluate(await self.get_for_user(user_id))

    async def resolve_viewer(self, user_id: UUID) -> ViewerSession:
        """Resolve the authenticated user into the session used by core calls."""
        profile = await self.get_for_user(user_id)
        if not profile:
            raise AuthenticationError(
                message="No profile registered for this user",
                error_code=ErrorCode.PROFILE_REQUIRED,
            )
        return ViewerSession(user_id=user_id, profile_id=profile.id, role=profile.role)

    @staticmethod
    def _reject_unknown_fields(fields: dict[str, Any]) -> None:
        unknown = sorted(set(fields) - EDITABLE_FIELDS)
        if unknown:
            raise InvalidProfileError(f"Unknown profile field: {unknown[0]}", unknown[0])

    @staticmethod
    def _normalize(profile: Profile) -> None:
        """Trim text, lowercase weekday tokens and coerce enum values."""
        profile.name = profile.name.strip() if profile.name else profile.name
        if profile.job_type is not None:
            try:
                profile.job_type = JobType(profile.job_type)
            except ValueError:
                raise InvalidProfileError(
                    f"Unknown job type: {profile.job_type}", "job_type"
                ) from None
        if profile.availability_days is not None:
            profile.availability_days = [day.strip().lower() for day in profile.availability_days]

    @staticmethod
    def _validate(profile: Profile) -> None:
        """Enforce profile invariants regardless of which API produced the data."""
        if not profile.name:
            raise InvalidProfileError("Name is required", "name")

        if profile.description and len(profile.description) > DESCRIPTION_MAX_LENGTH:
            raise InvalidProfileError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
                "description",
            )

        for name in _NON_NEGATIVE_FIELDS:
            value = getattr(profile, name)
            if value is not None and value < 0:
                raise InvalidProfileError(f"{name} must not be negative", name)

        if (
            profile.salary_min is not None
            and profile.salary_max is not None
            and profile.salary_min > profile.salary_max
        ):
            raise InvalidProfileError(
                "Minimum salary cannot exceed maximum salary", "salary_min"
            )

        for day in profile.availability_days or []:
            if day not in WEEKDAYS:
                raise InvalidProfileError(f"Unknown weekday: {day}", "availability_days")
