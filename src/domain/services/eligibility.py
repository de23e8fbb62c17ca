"""Discovery feed eligibility rules."""

from collections.abc import Iterable
from uuid import UUID

from domain.entities.profile import Profile
from domain.entities.swipe import SwipeDecision
from domain.services.profile_completion import is_complete


def decided_ids(viewer: Profile, decisions: Iterable[SwipeDecision]) -> set[UUID]:
    """Ids of every profile the viewer has already liked or passed."""
    return {d.to_profile_id for d in decisions if d.from_profile_id == viewer.id}


def candidates_for(
    viewer: Profile,
    profiles: Iterable[Profile],
    decisions: Iterable[SwipeDecision],
    limit: int | None = None,
) -> list[Profile]:
    """Build the discovery feed for ``viewer``.

    Rules, in order:
      1. An incomplete viewer gets an empty feed.
      2. The viewer never sees itself.
      3. Only profiles of the opposite role are shown.
      4. Anything the viewer already decided on (LIKE or PASS) never resurfaces.
      5. Incomplete candidates are hidden.

    The result is ordered by ``(created_at, id)`` and capped at ``limit``.
    """
    if not is_complete(viewer):
        return []

    target_role = viewer.role.opposite
    already_decided = decided_ids(viewer, decisions)

    eligible = [
        profile
        for profile in profiles
        if profile.id != viewer.id
        and profile.role is target_role
        and profile.id not in already_decided
        and is_complete(profile)
    ]
    eligible.sort(key=lambda p: (p.created_at, str(p.id)))

    if limit is not None:
        return eligible[: max(limit, 0)]
    return eligible
