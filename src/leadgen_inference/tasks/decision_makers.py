"""
Decision-maker identification task.

Payload: list[DecisionMakerCandidate], cleaned, deduplicated and ranked 1..N.
"""

from typing import Any, Optional

import structlog

from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.logging_config import preview
from leadgen_inference.models.input_models import RequirementContext
from leadgen_inference.models.output_models import DecisionMakerCandidate
from leadgen_inference.tasks.base import BaseOrchestrationTask
from leadgen_inference.validation.decision_makers import DecisionMakerValidator
from leadgen_inference.validation.exceptions import DecisionMakerValidationError
from leadgen_inference.validation.extractor import ResponseExtractor
from leadgen_inference.validation.schemas import (
    DECISION_MAKERS_FUNCTION_NAME,
    DECISION_MAKERS_FUNCTION_SCHEMA,
)

logger = structlog.get_logger(__name__)


def unwrap_decision_makers(parsed: Any) -> Any:
    """
    Accept the payload shapes models actually return.

    {"decision_makers": [...]} and bare arrays are used as-is; a single
    object is wrapped in a list. Anything else is passed through for the
    validator to reject.
    """
    if isinstance(parsed, dict):
        if "decision_makers" in parsed:
            return parsed["decision_makers"]
        return [parsed]
    return parsed


class DecisionMakerTask(BaseOrchestrationTask[list[DecisionMakerCandidate]]):
    """Identify and rank decision-maker roles for one requirement."""

    name = "decision_makers"
    function_name = DECISION_MAKERS_FUNCTION_NAME
    function_description = "Identify decision makers for a business requirement"
    function_schema = DECISION_MAKERS_FUNCTION_SCHEMA

    def __init__(
        self,
        context: RequirementContext,
        prompt_builder: PromptBuilder,
        validator: Optional[DecisionMakerValidator] = None,
        extractor: Optional[ResponseExtractor] = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        provider_max_tokens: Optional[dict[str, int]] = None,
    ):
        super().__init__(
            system_prompt=prompt_builder.decision_maker_system_prompt(),
            temperature=temperature,
            max_tokens=max_tokens,
            provider_max_tokens=provider_max_tokens,
        )
        self.context = context
        self.prompt_builder = prompt_builder
        self.validator = validator or DecisionMakerValidator()
        self.extractor = extractor or ResponseExtractor()

    def prompt_for(self, attempt: int) -> str:
        return self.prompt_builder.decision_maker_prompt(self.context, attempt)

    def interpret(self, raw_text: str) -> list[DecisionMakerCandidate]:
        """
        Extract, validate and normalize a decision-maker answer.

        Raises:
            ExtractionError: No JSON could be recovered
            DecisionMakerValidationError: The list violates a constraint
        """
        parsed = self.extractor.extract(raw_text)
        decision_makers = unwrap_decision_makers(parsed)

        if not isinstance(decision_makers, list):
            raise DecisionMakerValidationError(
                f"Invalid response format: expected array, got {type(decision_makers).__name__}",
                errors=["Decision makers must be an array"],
            )

        result = self.validator.validate(decision_makers)
        if not result.valid:
            logger.warning(
                "Decision-maker output rejected",
                errors=result.errors[:5],
                raw_preview=preview(raw_text),
            )
            raise DecisionMakerValidationError(
                "; ".join(result.errors) or "Not enough valid decision makers",
                errors=result.errors,
            )

        logger.info(
            "Decision makers validated",
            count=len(result.cleaned),
            roles=[candidate.role for candidate in result.cleaned],
        )
        return result.cleaned
