"""
FastAPI dependency injection for the orchestration layer.

Provides singleton instances of expensive resources (provider clients,
prompt builder, repository) and a factory for the orchestrator.
"""

from functools import lru_cache

from fastapi import Depends

from leadgen_inference.config import Settings, settings
from leadgen_inference.llm.gemini_client import GeminiClient
from leadgen_inference.llm.openai_client import OpenAIClient
from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.persistence.repository import (
    DecisionMakerRepository,
    InMemoryDecisionMakerRepository,
)
from leadgen_inference.retry.backoff import BackoffPlanner
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.retry.policy import RetryPolicy


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_openai_client() -> OpenAIClient:
    """
    Get singleton primary provider client with connection pooling.

    An unusable key (missing or placeholder) leaves the client unconfigured,
    so the orchestrator skips it.
    """
    current = get_settings()
    return OpenAIClient(
        api_key=current.OPENAI_API_KEY if current.openai_configured else None,
        model=current.OPENAI_MODEL,
        base_url=current.OPENAI_BASE_URL,
        timeout=current.OPENAI_TIMEOUT,
    )


@lru_cache()
def get_gemini_client() -> GeminiClient:
    """Get singleton secondary provider client (unconfigured on short/placeholder keys)."""
    current = get_settings()
    return GeminiClient(
        api_key=current.GEMINI_API_KEY if current.gemini_configured else None,
        model=current.GEMINI_MODEL,
        base_url=current.GEMINI_BASE_URL,
        timeout=current.GEMINI_TIMEOUT,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Get singleton prompt builder.

    Loads Jinja2 templates once and reuses them across requests.
    """
    return PromptBuilder(max_industries=get_settings().MAX_INDUSTRIES)


@lru_cache()
def get_retry_policy() -> RetryPolicy:
    return RetryPolicy.from_settings(get_settings())


@lru_cache()
def get_repository() -> DecisionMakerRepository:
    """In-memory repository shared by all requests of the process."""
    return InMemoryDecisionMakerRepository()


def get_orchestrator(
    primary: OpenAIClient = Depends(get_openai_client),
    secondary: GeminiClient = Depends(get_gemini_client),
    policy: RetryPolicy = Depends(get_retry_policy),
) -> ProviderOrchestrator:
    """
    Create orchestrator with injected dependencies.

    Note: the orchestrator is NOT cached because it holds no per-call state
    and is cheap to build. All heavy resources are singletons.

    Args:
        primary: Primary provider client (injected)
        secondary: Secondary provider client (injected)
        policy: Retry policy (injected)

    Returns:
        ProviderOrchestrator instance
    """
    return ProviderOrchestrator(
        primary=primary,
        secondary=secondary,
        policy=policy,
        planner=BackoffPlanner(policy),
    )


async def close_provider_clients() -> None:
    """Close pooled HTTP clients of the provider singletons."""
    await get_openai_client().close()
    await get_gemini_client().close()
