"""
Input data models for the orchestration layer.

The caller owns the requirement record; the core only ever reads the
immutable RequirementContext built from it.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class RequirementContext(BaseModel):
    """
    Free-text business requirement plus optional targeting hints.

    Frozen: prompts for every attempt are rendered from the same context.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    free_text: str = Field(
        ...,
        min_length=1,
        description="Business requirement as written by the user",
    )
    industry: Optional[str] = Field(default=None, description="Industry, if already known")
    product_or_service: Optional[str] = Field(default=None, description="What is being sold")
    target_location: Optional[str] = Field(default=None, description="Target geography")
    target_market: Optional[str] = Field(default=None, description="e.g. B2B, SMB, Enterprise")

    @field_validator("free_text")
    @classmethod
    def _strip_free_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("free_text must not be blank")
        return value

    @field_validator("industry", "product_or_service", "target_location", "target_market")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None
