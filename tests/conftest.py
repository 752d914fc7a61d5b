"""Shared test fixtures and configuration for all tests.

This conftest.py provides scripted provider clients, a recording sleep and
sample provider output used across unit and integration tests.
"""

import json
import random
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import pytest

from leadgen_inference.config import Settings
from leadgen_inference.llm.base_client import BaseLLMClient
from leadgen_inference.llm.exceptions import LLMRateLimitError
from leadgen_inference.llm.prompt_builder import PromptBuilder
from leadgen_inference.models.input_models import RequirementContext
from leadgen_inference.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from leadgen_inference.retry.backoff import BackoffPlanner
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.retry.policy import RetryPolicy

ScriptItem = Union[str, BaseException]


class ScriptedClient(BaseLLMClient):
    """Provider client that replays a script of outputs and exceptions.

    Each generate() call pops the next item: strings become response
    content, exceptions are raised. Every request is recorded.
    """

    def __init__(
        self,
        provider: str,
        script: Sequence[ScriptItem] = (),
        model: Optional[str] = None,
        configured: bool = True,
    ):
        self.provider = provider
        super().__init__(
            api_key="test-key" if configured else None,
            model=model or f"{provider}-test-model",
            base_url="http://provider.test",
        )
        self.script = list(script)
        self.requests: list[LLMGenerationRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        self.requests.append(request)
        if not self.script:
            raise AssertionError(f"Unexpected call to {self.provider} (script exhausted)")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return LLMGenerationResponse(
            content=item,
            provider=self.provider,
            model_version=self.model,
            finish_reason="stop",
            usage_tokens=150,
            prompt_tokens=100,
            completion_tokens=50,
            latency_ms=5,
        )


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with both providers configured and metrics off.

    Override specific settings in individual tests with model_copy(update=...).
    """
    return Settings(
        _env_file=None,
        APP_NAME="Lead Generation Inference Layer (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        OPENAI_API_KEY="sk-test-openai-key",
        GEMINI_API_KEY="gemini-test-key-0123456789abcdef",
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def decision_makers_data(fixtures_dir: Path) -> list[dict[str, Any]]:
    """Five valid decision makers as a provider would return them."""
    with open(fixtures_dir / "decision_makers.json") as f:
        return json.load(f)


@pytest.fixture
def decision_makers_json(decision_makers_data: list[dict[str, Any]]) -> str:
    return json.dumps(decision_makers_data)


@pytest.fixture
def requirement_context() -> RequirementContext:
    return RequirementContext(
        free_text="I want to sell cloud monitoring software to SaaS companies in Germany",
        industry="Technology",
        product_or_service="Cloud monitoring software",
        target_location="Germany",
        target_market="B2B",
    )


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    return PromptBuilder()


@pytest.fixture
def scripted_client():
    """Factory fixture for ScriptedClient.

    Usage:
        def test_something(scripted_client):
            primary = scripted_client("openai", [LLMRateLimitError(...), "[...]"])
    """
    return ScriptedClient


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_orchestrator(recording_sleep: RecordingSleep, seeded_rng: random.Random):
    """Factory for orchestrators that never actually wait."""

    def _make(
        primary: BaseLLMClient,
        secondary: Optional[BaseLLMClient] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> ProviderOrchestrator:
        policy = policy or RetryPolicy()
        return ProviderOrchestrator(
            primary=primary,
            secondary=secondary,
            policy=policy,
            planner=BackoffPlanner(policy, seeded_rng),
            sleep=recording_sleep,
        )

    return _make


@pytest.fixture
def rate_limit_error() -> LLMRateLimitError:
    return LLMRateLimitError(
        "OpenAI API error (429): Rate limit reached for requests",
        status_code=429,
    )
