"""
LLM-specific data models for request/response cycle.

These models are internal to the LLM layer and handle the raw communication
with AI providers (OpenAI, Gemini). They are separate from the business
models (DecisionMakerCandidate, IndustryCandidateList) so the orchestrator
stays agnostic of provider wire formats.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class LLMGenerationRequest(BaseModel):
    """
    Internal request model for one provider call.

    This is the standardized format sent to any provider client. Provider
    clients translate it into their own payload (chat messages + function
    calling for OpenAI, contents + generationConfig for Gemini).
    """
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1, description="User prompt for this attempt")
    system_prompt: Optional[str] = Field(default=None, description="System instruction")
    model: Optional[str] = Field(
        default=None,
        description="Model override; the client's configured model is used when unset"
    )
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=1000, ge=1, le=8192, description="Maximum tokens to generate")
    function_name: Optional[str] = Field(
        default=None,
        description="Function name for structured output (OpenAI function calling)"
    )
    function_description: Optional[str] = Field(default=None)
    function_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON Schema of the function arguments"
    )
    json_mode: bool = Field(
        default=True,
        description="Ask the provider for a JSON MIME type when it supports one"
    )
    plain_text_suffix: Optional[str] = Field(
        default=None,
        description="Instruction appended when a provider falls back from JSON mode"
    )


class LLMGenerationResponse(BaseModel):
    """
    Internal response model from one successful provider call.

    Contains the raw generated text plus metadata for provenance/logging.
    Extraction and validation of the content happen in the validation layer.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Raw generated text (ideally JSON)")
    provider: str = Field(..., description="Provider that produced the text")
    model_version: str = Field(..., description="Model reported by the provider")
    finish_reason: str = Field(
        default="stop",
        description="Why generation stopped: 'stop', 'length', 'function_call', etc."
    )
    usage_tokens: Optional[int] = Field(default=None, description="Total tokens used")
    prompt_tokens: Optional[int] = Field(default=None, description="Tokens in prompt")
    completion_tokens: Optional[int] = Field(default=None, description="Tokens in completion")
    latency_ms: int = Field(..., ge=0, description="Call latency in milliseconds")
    json_mode: bool = Field(default=True, description="Whether JSON mode was honoured")
    raw_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific metadata (for debugging)"
    )
