"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID, uuid4

DESCRIPTION_MAX_LENGTH = 500
WEEKDAYS = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


class ProfileRole(StrEnum):
    """Which side of the marketplace a profile belongs to."""

    CLINIC = "clinic"
    WORKER = "worker"

    @property
    def opposite(self) -> "ProfileRole":
        """The role whose profiles this role is shown in discovery."""
        return ProfileRole.WORKER if self is ProfileRole.CLINIC else ProfileRole.CLINIC


class JobType(StrEnum):
    """Kind of engagement a clinic offers or a worker is looking for."""

    DAILY = "daily"
    TEMPORARY = "temporary"
    PERMANENT = "permanent"


@dataclass(frozen=True, slots=True)
class Availability:
    """Read-only value object: when a worker can start or a clinic needs staff."""

    days: list[str]
    hours: str | None
    start_date: date | None


@dataclass(frozen=True, slots=True)
class SalaryRange:
    """Read-only value object: expected or offered salary bounds."""

    min: int | None
    max: int | None


@dataclass
class Profile:
    """Domain entity for a clinic or worker profile."""

    user_id: UUID
    role: ProfileRole
    name: str
    id: UUID = field(default_factory=uuid4)
    position: str | None = None
    required_position: str | None = None
    description: str | None = None
    city: str | None = None
    preferred_area: str | None = None
    radius_km: int | None = None
    experience_years: int | None = None
    availability_days: list[str] | None = None
    availability_hours: str | None = None
    availability_date: date | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    job_type: JobType | None = None
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Coerce the role and keep timestamps ordered."""
        self.role = ProfileRole(self.role)
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_clinic(self) -> bool:
        return self.role is ProfileRole.CLINIC

    @property
    def location(self) -> str | None:
        """City for clinics, preferred area for workers."""
        return self.city if self.is_clinic else self.preferred_area

    @property
    def headline_position(self) -> str | None:
        """The position shown on cards: the opening for clinics, the profession for workers."""
        return self.required_position if self.is_clinic else self.position

    @property
    def availability(self) -> Availability:
        return Availability(
            days=list(self.availability_days or []),
            hours=self.availability_hours,
            start_date=self.availability_date,
        )

    @property
    def salary_range(self) -> SalaryRange:
        return SalaryRange(min=self.salary_min, max=self.salary_max)

    def touch(self) -> None:
        """Bump the modification timestamp."""
        self.updated_at = datetime.utcnow()
