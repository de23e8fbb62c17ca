"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import ErrorCode


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing ClinicMatch endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": ErrorCode.MATCH_CLOSED.value,
                "message": "This match is closed",
                "details": {"match_id": "123e4567-e89b-12d3-a456-426614174000"},
            }
        },
    )

    error_code: str = Field(..., description="Stable machine-readable code, see ErrorCode")
    message: str
    details: Any | None = None
