"""Viewer session value object."""

from dataclasses import dataclass
from uuid import UUID

from domain.entities.profile import ProfileRole


@dataclass(frozen=True, slots=True)
class ViewerSession:
    """The resolved caller of a request: an authenticated user and their profile.

    Built once per request from the bearer token and passed explicitly into
    every service call.
    """

    user_id: UUID
    profile_id: UUID
    role: ProfileRole
