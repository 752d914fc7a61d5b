"""
API-specific request and response models for FastAPI endpoints.

These models wrap the service results (DecisionMakerIdentification,
IndustryIdentification) with API-specific metadata.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from leadgen_inference.models.output_models import IndustryAlignment


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IndustryIdentifyRequest(BaseModel):
    """Request for industry identification."""

    requirement_text: Optional[str] = Field(
        default=None,
        description="Free-text business requirement (at least 10 characters)",
        examples=["I want to sell enterprise CRM software to technology companies in the Netherlands"],
    )


class ValidationSummary(BaseModel):
    """Validation outcome attached to decision-maker responses."""

    passed: bool = True
    industry_alignment: Optional[IndustryAlignment] = None


class DecisionMakersResponse(BaseModel):
    """Response for decision-maker identification."""

    message: str
    requirement_id: str
    decision_makers: list[dict[str, Any]] = Field(
        description="Saved decision-maker records, priority order"
    )
    api_source: str = Field(examples=["openai", "gemini"])
    model: str = Field(examples=["gpt-4o-mini", "gemini-2.5-flash"])
    count: int = Field(ge=0)
    attempts_made: int = Field(ge=1)
    validation: ValidationSummary


class IndustryResponse(BaseModel):
    """Response for industry identification."""

    message: str = "Industry identified successfully"
    industry: str
    primary_industry: str
    industries: list[str] = Field(examples=[["Technology", "Software", "IT Services"]])
    api_source: str
    model: str
    attempts_made: int = Field(ge=1)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded", "unhealthy"]
    )
    version: str = Field(
        description="Application version",
        examples=["0.1.0"]
    )
    providers: dict[str, str] = Field(
        description="Provider configuration status",
        examples=[{"openai": "configured", "gemini": "not_configured"}]
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error category",
        examples=["quota_exceeded", "unavailable", "validation_failed", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    attempts: Optional[int] = Field(
        default=None,
        description="Provider attempts made before giving up"
    )
    details: Optional[Any] = Field(
        default=None,
        description="Additional error details (e.g., request validation failures)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)"
    )
