"""
Orchestration task interface.

A task tells the orchestrator what to ask (one request per attempt number
and provider) and how to turn raw provider text into a trusted payload.
The orchestrator itself never looks at prompt wording or payload shape.
"""

from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable

from leadgen_inference.models.llm_models import LLMGenerationRequest

PayloadT = TypeVar("PayloadT")
PayloadT_co = TypeVar("PayloadT_co", covariant=True)


@runtime_checkable
class OrchestrationTask(Protocol[PayloadT_co]):
    """What ProviderOrchestrator needs from a task."""

    name: str

    def build_request(self, attempt: int, provider: str) -> LLMGenerationRequest:
        """Request for a 1-based, per-provider attempt number."""
        ...

    def interpret(self, raw_text: str) -> PayloadT_co:
        """Extract and validate provider text; raises ValidationError subclasses."""
        ...


class BaseOrchestrationTask(Generic[PayloadT]):
    """
    Shared request building for concrete tasks.

    Subclasses set the class attributes and implement prompt_for() and
    interpret().
    """

    name: str = "task"
    function_name: Optional[str] = None
    function_description: Optional[str] = None
    function_schema: Optional[dict[str, Any]] = None
    plain_text_suffix: Optional[str] = None

    def __init__(
        self,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int,
        provider_max_tokens: Optional[dict[str, int]] = None,
    ):
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.provider_max_tokens = dict(provider_max_tokens or {})

    def prompt_for(self, attempt: int) -> str:
        raise NotImplementedError

    def interpret(self, raw_text: str) -> PayloadT:
        raise NotImplementedError

    def build_request(self, attempt: int, provider: str) -> LLMGenerationRequest:
        return LLMGenerationRequest(
            prompt=self.prompt_for(attempt),
            system_prompt=self.system_prompt,
            temperature=self.temperature,
            max_tokens=self.provider_max_tokens.get(provider, self.max_tokens),
            function_name=self.function_name,
            function_description=self.function_description,
            function_schema=self.function_schema,
            json_mode=True,
            plain_text_suffix=self.plain_text_suffix,
        )
