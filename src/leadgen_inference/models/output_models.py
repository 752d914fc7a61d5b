"""
Output data models for the orchestration layer.

These models are only ever built from validated, normalized provider output
(see leadgen_inference.validation). Once constructed they are never mutated.
"""

from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field, ConfigDict, field_validator

from leadgen_inference.models.enums import IndustryRelevance
from leadgen_inference.models.provenance import ProviderAttempt

PayloadT = TypeVar("PayloadT")


class DecisionMakerCandidate(BaseModel):
    """
    A single decision-maker role recommended for a requirement.

    The validator guarantees a single clean title (no "/" and no "or"
    alternatives) and a dense 1..N priority ranking within one result set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: str = Field(..., min_length=1, description="Single clean job title")
    priority: int = Field(..., ge=1, description="1 = highest priority")
    reasoning: str = Field(..., min_length=10, description="Why this role matters")
    industry_relevance: IndustryRelevance = Field(..., description="high / medium / low")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Model confidence")


class IndustryCandidateList(BaseModel):
    """
    Up to three industry labels, primary first.

    When fewer distinct labels were found the list may be padded by repeating
    the last one; distinct_count keeps the number of real entries.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    industries: list[str] = Field(..., min_length=1, max_length=3)
    distinct_count: int = Field(..., ge=1, le=3)

    @field_validator("industries")
    @classmethod
    def _no_blank_entries(cls, value: list[str]) -> list[str]:
        if any(not item.strip() for item in value):
            raise ValueError("industry labels must not be blank")
        return value

    @property
    def primary(self) -> str:
        return self.industries[0]


class IndustryAlignment(BaseModel):
    """Share of recommended roles that match the industry's typical buyers."""

    model_config = ConfigDict(frozen=True)

    aligned: bool
    score: float = Field(..., ge=0.0, le=1.0)


class OrchestrationResult(BaseModel, Generic[PayloadT]):
    """
    Successful orchestration outcome with provenance.

    attempts_made counts every provider call of the orchestration, across
    both providers.
    """

    model_config = ConfigDict(frozen=True)

    candidates: PayloadT
    provider_used: str
    model_used: str
    attempts_made: int = Field(..., ge=1)
    attempts: list[ProviderAttempt] = Field(default_factory=list)
    raw_provenance: dict[str, Any] = Field(default_factory=dict)


class DecisionMakerIdentification(BaseModel):
    """Caller-side outcome of identifying and saving decision makers."""

    requirement_id: str
    decision_makers: list[dict[str, Any]]
    api_source: str
    model: str
    count: int = Field(..., ge=0)
    attempts_made: int = Field(..., ge=1)
    industry_alignment: Optional[IndustryAlignment] = None


class IndustryIdentification(BaseModel):
    """Caller-side outcome of classifying a requirement's industry."""

    industry: str
    primary_industry: str
    industries: list[str]
    api_source: str
    model: str
    attempts_made: int = Field(..., ge=1)
