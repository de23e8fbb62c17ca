"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.entities.profile import (
    DESCRIPTION_MAX_LENGTH,
    WEEKDAYS,
    JobType,
    Profile,
    ProfileRole,
)
from domain.services.profile_completion import ProfileCompletion


class ProfileFields(BaseModel):
    """Optional profile attributes shared by create and update."""

    model_config = ConfigDict(extra="forbid")

    position: str | None = Field(None, max_length=100)
    required_position: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    city: str | None = Field(None, max_length=100)
    preferred_area: str | None = Field(None, max_length=100)
    radius_km: int | None = Field(None, ge=0)
    experience_years: int | None = Field(None, ge=0)
    availability_days: list[str] | None = None
    availability_hours: str | None = Field(None, max_length=100)
    availability_date: date | None = None
    salary_min: int | None = Field(None, ge=0)
    salary_max: int | None = Field(None, ge=0)
    job_type: JobType | None = None
    avatar_url: str | None = Field(None, max_length=500)

    @field_validator("availability_days")
    @classmethod
    def validate_days(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        days = [day.strip().lower() for day in v]
        unknown = [day for day in days if day not in WEEKDAYS]
        if unknown:
            raise ValueError(f"unknown weekday: {unknown[0]}")
        return days

    @model_validator(mode="after")
    def validate_salary_range(self) -> "ProfileFields":
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salary_min cannot exceed salary_max")
        return self


class ProfileCreate(ProfileFields):
    """Schema for registering a profile."""

    role: ProfileRole
    name: str = Field(..., min_length=1, max_length=100)


class ProfileUpdate(ProfileFields):
    """Schema for a partial profile update. Role cannot be changed."""

    name: str | None = Field(None, min_length=1, max_length=100)


class AvailabilitySchema(BaseModel):
    """When the profile is available or needs staff."""

    days: list[str]
    hours: str | None = None
    start_date: date | None = None


class SalaryRangeSchema(BaseModel):
    """Salary bounds; either side may be open."""

    min: int | None = None
    max: int | None = None


class ProfileResponse(BaseModel):
    """Schema for a full profile, as seen by its owner."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "role": "worker",
                "name": "Dana Levi",
                "position": "Dental assistant",
                "preferred_area": "Tel Aviv",
                "experience_years": 3,
                "availability_days": ["sun", "mon"],
                "job_type": "permanent",
            }
        },
    )

    id: UUID
    user_id: UUID
    role: ProfileRole
    name: str
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
    location: str | None = None
    headline_position: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            role=profile.role,
            name=profile.name,
            position=profile.position,
            required_position=profile.required_position,
            description=profile.description,
            city=profile.city,
            preferred_area=profile.preferred_area,
            radius_km=profile.radius_km,
            experience_years=profile.experience_years,
            availability_days=profile.availability_days,
            availability_hours=profile.availability_hours,
            availability_date=profile.availability_date,
            salary_min=profile.salary_min,
            salary_max=profile.salary_max,
            job_type=profile.job_type,
            avatar_url=profile.avatar_url,
            location=profile.location,
            headline_position=profile.headline_position,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class ProfileCard(BaseModel):
    """Public card shown in the feed and on matches."""

    id: UUID
    role: ProfileRole
    name: str
    position: str | None = None
    location: str | None = None
    availability: AvailabilitySchema
    salary_range: SalaryRangeSchema
    experience_years: int | None = None
    image_url: str | None = None
    description: str | None = None
    job_type: JobType | None = None
    radius_km: int | None = None

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileCard":
        availability = profile.availability
        salary = profile.salary_range
        return cls(
            id=profile.id,
            role=profile.role,
            name=profile.name,
            position=profile.headline_position,
            location=profile.location,
            availability=AvailabilitySchema(
                days=list(availability.days),
                hours=availability.hours,
                start_date=availability.start_date,
            ),
            salary_range=SalaryRangeSchema(min=salary.min, max=salary.max),
            experience_years=profile.experience_years,
            image_url=profile.avatar_url,
            description=profile.description,
            job_type=profile.job_type,
            radius_km=profile.radius_km,
        )


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileCardResponse(BaseModel):
    """Schema for another user's public profile card."""

    data: ProfileCard


class CompletionResponse(BaseModel):
    """Completeness assessment of a profile."""

    is_complete: bool
    percentage: int = Field(..., ge=0, le=100)
    missing_required_fields: list[str]
    filled_fields: list[str]
    total_fields: int

    @classmethod
    def from_result(cls, result: ProfileCompletion) -> "CompletionResponse":
        return cls(
            is_complete=result.is_complete,
            percentage=result.percentage,
            missing_required_fields=list(result.missing_required_fields),
            filled_fields=list(result.filled_fields),
            total_fields=result.total_fields,
        )


class CompletionDetailResponse(BaseModel):
    """Schema for the completion endpoint."""

    data: CompletionResponse
