"""
Per-attempt provenance models.

An ErrorClassification is the normalized verdict on one failed attempt; a
ProviderAttempt records what happened on one call. Both are created during
a single orchestration call and returned to the caller (inside the result
or the surfaced error); nothing here is persisted by the core.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from leadgen_inference.models.enums import ErrorCategory


class ErrorClassification(BaseModel):
    """Normalized verdict for a failed attempt."""

    model_config = ConfigDict(frozen=True)

    category: ErrorCategory
    message: str = Field(default="", description="Human-readable error message")
    suggested_retry_delay: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Provider-suggested wait in seconds (RetryInfo / 'retry in Ns')"
    )
    status_code: Optional[int] = Field(default=None, description="HTTP or envelope code")
    status: Optional[str] = Field(default=None, description="Provider status string")
    is_quota: bool = Field(
        default=False,
        description="Rate limit caused by an exhausted quota rather than request rate"
    )

    @property
    def retryable(self) -> bool:
        return self.category.retryable


class ProviderAttempt(BaseModel):
    """One provider call within an orchestration."""

    model_config = ConfigDict(frozen=True)

    provider_id: str
    model_id: str
    attempt_number: int = Field(..., ge=1, description="1-based, per provider")
    started_at: datetime
    latency_ms: Optional[int] = Field(default=None, ge=0)
    raw_output: Optional[str] = Field(default=None, description="Opaque provider text")
    error: Optional[ErrorClassification] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
