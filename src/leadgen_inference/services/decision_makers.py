"""
Decision-maker identification service.

Runs the decision-maker orchestration for a requirement, attaches the
industry alignment score and upserts every cleaned candidate into the
repository, keyed by (requirement_id, role).
"""

import json
from typing import Optional

import structlog

from leadgen_inference.config import Settings, settings as default_settings
from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.models.enums import ProviderName
from leadgen_inference.models.input_models import RequirementContext
from leadgen_inference.models.output_models import DecisionMakerIdentification
from leadgen_inference.persistence.repository import DecisionMakerRepository
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.tasks.decision_makers import DecisionMakerTask
from leadgen_inference.validation.alignment import check_industry_alignment
from leadgen_inference.validation.decision_makers import DecisionMakerValidator

logger = structlog.get_logger(__name__)


def build_decision_maker_task(
    context: RequirementContext,
    prompt_builder: PromptBuilder,
    settings: Settings,
) -> DecisionMakerTask:
    return DecisionMakerTask(
        context=context,
        prompt_builder=prompt_builder,
        validator=DecisionMakerValidator(
            min_count=settings.MIN_DECISION_MAKERS,
            max_count=settings.MAX_DECISION_MAKERS,
            min_reasoning_length=settings.MIN_REASONING_LENGTH,
        ),
        temperature=settings.DECISION_MAKER_TEMPERATURE,
        max_tokens=settings.DECISION_MAKER_MAX_TOKENS,
        provider_max_tokens={ProviderName.GEMINI.value: settings.GEMINI_DECISION_MAKER_MAX_TOKENS},
    )


async def identify_decision_makers(
    context: RequirementContext,
    orchestrator: ProviderOrchestrator,
    repository: DecisionMakerRepository,
    requirement_id: str,
    prompt_builder: Optional[PromptBuilder] = None,
    settings: Optional[Settings] = None,
) -> DecisionMakerIdentification:
    """
    Identify decision makers for a requirement and save them.

    Args:
        context: Requirement to analyse
        orchestrator: Provider orchestrator
        repository: Persistence collaborator (upsert_by_key)
        requirement_id: Identifier of the stored requirement
        prompt_builder: Prompt builder (default instance when omitted)
        settings: Application settings (module settings when omitted)

    Returns:
        DecisionMakerIdentification with the saved records and provenance

    Raises:
        OrchestrationError: Every provider was exhausted or none is configured
    """
    settings = settings or default_settings
    prompt_builder = prompt_builder or PromptBuilder()
    task = build_decision_maker_task(context, prompt_builder, settings)

    logger.info(
        "Identifying decision makers",
        requirement_id=requirement_id,
        industry=context.industry,
    )

    result = await orchestrator.run(task)
    candidates = result.candidates
    alignment = check_industry_alignment(candidates, context.industry)

    raw_api_response = json.dumps(
        {**result.raw_provenance, "industry_alignment": alignment.model_dump()},
        default=str,
    )

    saved = []
    for candidate in candidates:
        record = await repository.upsert_by_key(
            (requirement_id, candidate.role),
            {
                "role_title": candidate.role,
                "industry": context.industry,
                "priority": candidate.priority,
                "api_source": result.provider_used,
                "raw_api_response": raw_api_response,
                "reasoning": candidate.reasoning,
                "industry_relevance": candidate.industry_relevance.value,
                "confidence": candidate.confidence,
            },
        )
        saved.append(record)

    logger.info(
        "Saved decision makers",
        requirement_id=requirement_id,
        count=len(saved),
        api_source=result.provider_used,
        model=result.model_used,
        alignment_score=round(alignment.score, 2),
        aligned=alignment.aligned,
    )

    return DecisionMakerIdentification(
        requirement_id=requirement_id,
        decision_makers=saved,
        api_source=result.provider_used,
        model=result.model_used,
        count=len(saved),
        attempts_made=result.attempts_made,
        industry_alignment=alignment,
    )
