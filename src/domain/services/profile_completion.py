"""Profile completeness rules.

A profile may enter discovery only once every role-specific required field is
filled. The percentage is informational (progress bar) and is computed over a
broader set of fields relevant to the profile's role.
"""

import math
from dataclasses import dataclass
from typing import Any

from domain.entities.profile import Profile, ProfileRole

# All fields that contribute to the completion percentage
ALL_PROFILE_FIELDS: tuple[str, ...] = (
    "name",
    "position",
    "required_position",
    "description",
    "city",
    "preferred_area",
    "availability_days",
    "availability_hours",
    "availability_date",
    "salary_min",
    "salary_max",
    "job_type",
    "experience_years",
)

REQUIRED_FIELDS: dict[ProfileRole, tuple[str, ...]] = {
    ProfileRole.WORKER: ("name", "position", "preferred_area"),
    ProfileRole.CLINIC: ("name", "required_position", "city"),
}

# Fields that do not apply to a role and are left out of its denominator
EXCLUDED_FIELDS: dict[ProfileRole, frozenset[str]] = {
    ProfileRole.WORKER: frozenset({"required_position"}),
    ProfileRole.CLINIC: frozenset({"position", "experience_years"}),
}


@dataclass(frozen=True, slots=True)
class ProfileCompletion:
    """Read-only value object: completeness assessment of a profile."""

    is_complete: bool
    percentage: int
    missing_required_fields: list[str]
    filled_fields: list[str]
    total_fields: int


def is_filled(value: Any) -> bool:
    """Return whether a profile field value counts as filled.

    Numbers count as filled even when zero, so ``experience_years=0`` is a
    real answer rather than a blank.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return len(value.strip()) > 0
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def relevant_fields(role: ProfileRole) -> list[str]:
    """Fields scored for ``role``, in declaration order."""
    excluded = EXCLUDED_FIELDS[role]
    return [name for name in ALL_PROFILE_FIELDS if name not in excluded]


def _percentage(filled: int, total: int) -> int:
    # Half-up rounding; round() would round 0.5 to even
    if total == 0:
        return 0
    return int(math.floor(100 * filled / total + 0.5))


def evaluate(profile: Profile | None) -> ProfileCompletion:
    """Compute missing required fields and the completion percentage."""
    if profile is None:
        return ProfileCompletion(
            is_complete=False,
            percentage=0,
            missing_required_fields=["name", "role"],
            filled_fields=[],
            total_fields=len(ALL_PROFILE_FIELDS),
        )

    missing = [
        name for name in REQUIRED_FIELDS[profile.role] if not is_filled(getattr(profile, name))
    ]

    fields = relevant_fields(profile.role)
    filled = [name for name in fields if is_filled(getattr(profile, name))]

    return ProfileCompletion(
        is_complete=not missing,
        percentage=_percentage(len(filled), len(fields)),
        missing_required_fields=missing,
        filled_fields=filled,
        total_fields=len(fields),
    )


def is_complete(profile: Profile | None) -> bool:
    """Shortcut for ``evaluate(profile).is_complete``."""
    return evaluate(profile).is_complete

