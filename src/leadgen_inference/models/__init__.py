"""
Pydantic data models for the orchestration layer.

Includes:
- Input models (RequirementContext)
- Output models (DecisionMakerCandidate, IndustryCandidateList, OrchestrationResult)
- Provenance models (ErrorClassification, ProviderAttempt)
- Enums (IndustryRelevance, ProviderName, ErrorCategory, FailureCategory)
- LLM models (LLMGenerationRequest, LLMGenerationResponse)
"""

from leadgen_inference.models.enums import (
    ErrorCategory,
    FailureCategory,
    IndustryRelevance,
    ProviderName,
)
from leadgen_inference.models.input_models import RequirementContext
from leadgen_inference.models.llm_models import (
    LLMGenerationRequest,
    LLMGenerationResponse,
)
from leadgen_inference.models.provenance import ErrorClassification, ProviderAttempt
from leadgen_inference.models.output_models import (
    DecisionMakerCandidate,
    DecisionMakerIdentification,
    IndustryAlignment,
    IndustryCandidateList,
    IndustryIdentification,
    OrchestrationResult,
)

__all__ = [
    # Enums
    "ErrorCategory",
    "FailureCategory",
    "IndustryRelevance",
    "ProviderName",
    # Input models
    "RequirementContext",
    # LLM models
    "LLMGenerationRequest",
    "LLMGenerationResponse",
    # Provenance
    "ErrorClassification",
    "ProviderAttempt",
    # Output models
    "DecisionMakerCandidate",
    "DecisionMakerIdentification",
    "IndustryAlignment",
    "IndustryCandidateList",
    "IndustryIdentification",
    "OrchestrationResult",
]
