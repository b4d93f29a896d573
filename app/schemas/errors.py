"""Error body schema shared by every endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Fixed error object; code is one of the enumerated API error codes."""

    code: str = Field(..., description="Stable error code, e.g. INVALID_CREDENTIALS")
    message: str = Field(..., description="Human-readable description")
    errors: list[dict[str, Any]] | None = Field(
        default=None, description="Per-field problems for VALIDATION_ERROR"
    )
