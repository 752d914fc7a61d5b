"""
Extraction and validation of provider output.

Provider text flows through two steps before anything downstream trusts it:

1. **Extraction** (extractor.py): recover the JSON value (or bare scalar)
   from text that may be fenced, wrapped in prose or slightly malformed.
2. **Validation/normalization** (decision_makers.py, industries.py): enforce
   the payload constraints and return a cleaned copy.

Failures raise ValidationError subclasses, which the orchestrator treats as
retryable.
"""

from leadgen_inference.validation.alignment import check_industry_alignment
from leadgen_inference.validation.decision_makers import (
    DecisionMakerValidation,
    DecisionMakerValidator,
    clean_role_title,
)
from leadgen_inference.validation.exceptions import (
    DecisionMakerValidationError,
    ExtractionError,
    IndustryValidationError,
    ValidationError,
)
from leadgen_inference.validation.extractor import ResponseExtractor, extract_json
from leadgen_inference.validation.industries import normalize_industries, pad_industries

__all__ = [
    "ResponseExtractor",
    "extract_json",
    "DecisionMakerValidator",
    "DecisionMakerValidation",
    "clean_role_title",
    "normalize_industries",
    "pad_industries",
    "check_industry_alignment",
    "ValidationError",
    "ExtractionError",
    "DecisionMakerValidationError",
    "IndustryValidationError",
]
