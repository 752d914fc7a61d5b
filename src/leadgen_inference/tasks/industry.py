"""
Industry identification task.

Payload: IndustryCandidateList, primary industry first.
"""

from typing import Any, Optional

import structlog

from leadgen_inference.llm.prompt_builder import INDUSTRY_PLAIN_TEXT_SUFFIX, PromptBuilder
from leadgen_inference.models.output_models import IndustryCandidateList
from leadgen_inference.tasks.base import BaseOrchestrationTask
from leadgen_inference.validation.exceptions import ExtractionError, IndustryValidationError
from leadgen_inference.validation.extractor import ResponseExtractor
from leadgen_inference.validation.industries import normalize_industries, pad_industries
from leadgen_inference.validation.schemas import INDUSTRY_FUNCTION_NAME, INDUSTRY_FUNCTION_SCHEMA

logger = structlog.get_logger(__name__)


def industry_candidates(parsed: Any) -> Any:
    """Pick the industry value out of the accepted payload shapes."""
    if isinstance(parsed, dict):
        if parsed.get("industries"):
            return parsed["industries"]
        return parsed.get("industry")
    return parsed


class IndustryTask(BaseOrchestrationTask[IndustryCandidateList]):
    """Classify a free-text requirement into up to three industries."""

    name = "industry"
    function_name = INDUSTRY_FUNCTION_NAME
    function_description = "Identify the top 3 industries for a business requirement"
    function_schema = INDUSTRY_FUNCTION_SCHEMA
    plain_text_suffix = INDUSTRY_PLAIN_TEXT_SUFFIX

    def __init__(
        self,
        requirement_text: str,
        prompt_builder: PromptBuilder,
        extractor: Optional[ResponseExtractor] = None,
        max_industries: int = 3,
        pad_to_max: bool = True,
        temperature: float = 0.2,
        max_tokens: int = 120,
    ):
        super().__init__(
            system_prompt=prompt_builder.industry_system_prompt(),
            temperature=temperature,
            max_tokens=max_tokens,
        )
        self.requirement_text = requirement_text.strip()
        self.prompt_builder = prompt_builder
        self.extractor = extractor or ResponseExtractor()
        self.max_industries = max_industries
        self.pad_to_max = pad_to_max

    def prompt_for(self, attempt: int) -> str:
        return self.prompt_builder.industry_prompt(self.requirement_text, attempt)

    def interpret(self, raw_text: str) -> IndustryCandidateList:
        """
        Normalize an industry answer.

        A failed extraction is not fatal here: a plain-text answer is a
        valid industry name, so the raw text is normalized instead.

        Raises:
            IndustryValidationError: Nothing usable survived normalization
        """
        try:
            parsed = self.extractor.extract(raw_text)
        except ExtractionError:
            parsed = raw_text

        value = industry_candidates(parsed)
        industries = normalize_industries(value, limit=self.max_industries)

        if not industries and isinstance(value, list):
            # Cleanup removed everything; keep the model's own labels
            industries = [str(item).strip() for item in value if str(item).strip()][: self.max_industries]

        if not industries:
            raise IndustryValidationError(
                "No industry found in provider output",
                details={"parsed_type": type(parsed).__name__},
            )

        distinct_count = len(industries)
        if self.pad_to_max:
            industries = pad_industries(industries, self.max_industries)

        logger.info(
            "Industries identified",
            industries=industries,
            distinct_count=distinct_count,
        )
        return IndustryCandidateList(industries=industries, distinct_count=distinct_count)
