"""Industry identification service."""

from typing import Optional

import structlog

from leadgen_inference.config import Settings, settings as default_settings
from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.models.output_models import IndustryIdentification
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.services.exceptions import InvalidRequirementError
from leadgen_inference.tasks.industry import IndustryTask

logger = structlog.get_logger(__name__)


async def identify_industry(
    requirement_text: Optional[str],
    orchestrator: ProviderOrchestrator,
    prompt_builder: Optional[PromptBuilder] = None,
    settings: Optional[Settings] = None,
) -> IndustryIdentification:
    """
    Classify a requirement text into up to three industries.

    Raises:
        InvalidRequirementError: Text missing or shorter than the minimum length
        OrchestrationError: Every provider was exhausted or none is configured
    """
    settings = settings or default_settings
    text = (requirement_text or "").strip()

    if not text:
        raise InvalidRequirementError("Requirement text is required")
    if len(text) < settings.MIN_REQUIREMENT_TEXT_LENGTH:
        raise InvalidRequirementError(
            f"Requirement text must be at least {settings.MIN_REQUIREMENT_TEXT_LENGTH} characters long"
        )

    task = IndustryTask(
        requirement_text=text,
        prompt_builder=prompt_builder or PromptBuilder(max_industries=settings.MAX_INDUSTRIES),
        max_industries=settings.MAX_INDUSTRIES,
        pad_to_max=settings.PAD_INDUSTRY_LIST,
        temperature=settings.INDUSTRY_TEMPERATURE,
        max_tokens=settings.INDUSTRY_MAX_TOKENS,
    )

    result = await orchestrator.run(task)
    industries = result.candidates

    logger.info(
        "Industry identified",
        primary_industry=industries.primary,
        industries=industries.industries,
        api_source=result.provider_used,
    )

    return IndustryIdentification(
        industry=industries.primary,
        primary_industry=industries.primary,
        industries=industries.industries,
        api_source=result.provider_used,
        model=result.model_used,
        attempts_made=result.attempts_made,
    )
