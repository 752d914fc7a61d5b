"""
API routes for decision-maker and industry identification.

Both endpoints run a full orchestration inline (primary provider, then
secondary) and answer once a validated result or a classified failure is
available.
"""

import structlog
from fastapi import APIRouter, Depends, status

from leadgen_inference.api.dependencies import (
    get_orchestrator,
    get_prompt_builder,
    get_repository,
    get_settings,
)
from leadgen_inference.api.models import (
    DecisionMakersResponse,
    ErrorResponse,
    HealthResponse,
    IndustryIdentifyRequest,
    IndustryResponse,
    ValidationSummary,
)
from leadgen_inference.config import Settings
from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.models.input_models import RequirementContext
from leadgen_inference.persistence.repository import DecisionMakerRepository
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.services.decision_makers import identify_decision_makers
from leadgen_inference.services.industry import identify_industry

logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    422: {"model": ErrorResponse, "description": "Provider output failed validation on every attempt"},
    429: {"model": ErrorResponse, "description": "Provider quota or rate limit exhausted"},
    500: {"model": ErrorResponse, "description": "Provider failure"},
    503: {"model": ErrorResponse, "description": "Providers overloaded or not configured"},
}


@router.post(
    "/requirements/{requirement_id}/decision-makers",
    response_model=DecisionMakersResponse,
    status_code=status.HTTP_200_OK,
    summary="Identify decision makers for a requirement",
    responses=ERROR_RESPONSES,
)
async def post_decision_makers(
    requirement_id: str,
    context: RequirementContext,
    orchestrator: ProviderOrchestrator = Depends(get_orchestrator),
    repository: DecisionMakerRepository = Depends(get_repository),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> DecisionMakersResponse:
    """
    Identify, rank and save decision-maker roles.

    Records are upserted by (requirement_id, role), so repeating the call
    refreshes existing roles instead of duplicating them.
    """
    result = await identify_decision_makers(
        context=context,
        orchestrator=orchestrator,
        repository=repository,
        requirement_id=requirement_id,
        prompt_builder=prompt_builder,
        settings=settings,
    )

    return DecisionMakersResponse(
        message=f"Decision makers identified successfully using {result.api_source.upper()} API",
        requirement_id=result.requirement_id,
        decision_makers=result.decision_makers,
        api_source=result.api_source,
        model=result.model,
        count=result.count,
        attempts_made=result.attempts_made,
        validation=ValidationSummary(passed=True, industry_alignment=result.industry_alignment),
    )


@router.post(
    "/industries/identify",
    response_model=IndustryResponse,
    status_code=status.HTTP_200_OK,
    summary="Identify the industries of a requirement text",
    responses=ERROR_RESPONSES,
)
async def post_identify_industry(
    body: IndustryIdentifyRequest,
    orchestrator: ProviderOrchestrator = Depends(get_orchestrator),
    prompt_builder: PromptBuilder = Depends(get_prompt_builder),
    settings: Settings = Depends(get_settings),
) -> IndustryResponse:
    result = await identify_industry(
        requirement_text=body.requirement_text,
        orchestrator=orchestrator,
        prompt_builder=prompt_builder,
        settings=settings,
    )
    return IndustryResponse(**result.model_dump())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Report provider configuration.

    No provider is called: a health probe must not spend quota.
    "degraded" means only one provider is configured.
    """
    providers = {
        "openai": "configured" if settings.openai_configured else "not_configured",
        "gemini": "configured" if settings.gemini_configured else "not_configured",
    }
    configured = sum(1 for value in providers.values() if value == "configured")

    if configured == len(providers):
        health_status = "healthy"
    elif configured:
        health_status = "degraded"
    else:
        health_status = "unhealthy"

    logger.debug("Health check", status=health_status, providers=providers)
    return HealthResponse(status=health_status, version=settings.APP_VERSION, providers=providers)
