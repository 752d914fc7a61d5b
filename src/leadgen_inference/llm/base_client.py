"""
Abstract base client for AI providers.

Defines the interface that all provider implementations (OpenAI, Gemini)
must adhere to. The orchestrator only talks to this interface, so providers
can be swapped or reordered without touching retry or validation logic.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import structlog

from leadgen_inference.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for provider clients.

    Responsibilities:
    - Send one generation request to the provider
    - Translate the provider payload into LLMGenerationResponse
    - Translate transport and HTTP failures into LLMClientError subclasses

    Does NOT handle:
    - Prompt wording (that's PromptBuilder's job)
    - Extraction/validation of the output (that's the validation layer's job)
    - Retries and failover (that's ProviderOrchestrator's job)
    """

    provider: str = "unknown"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base client.

        Args:
            api_key: Provider API key (None when the provider is not configured)
            model: Default model name
            base_url: Base URL of the provider API
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "Initialized provider client",
            client_class=self.__class__.__name__,
            provider=self.provider,
            model=model,
            timeout=timeout,
            configured=self.is_configured,
        )

    @property
    def is_configured(self) -> bool:
        """Whether the client has credentials to make calls."""
        return bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient", provider=self.provider)
        return self._client

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Run one generation call against the provider.

        Implementations make exactly one logical call (plus at most one
        provider-specific format fallback) and never sleep or retry.

        Args:
            request: Standardized generation request

        Returns:
            LLMGenerationResponse with the raw text and usage metadata

        Raises:
            LLMConnectionError: Network errors
            LLMTimeoutError: Request exceeded its timeout
            LLMRateLimitError: HTTP 429 / RESOURCE_EXHAUSTED
            LLMServiceUnavailableError: HTTP 503 / UNAVAILABLE
            LLMAuthenticationError: HTTP 401/403
            LLMGenerationError: Any other provider-side failure or empty output
        """
        pass

    async def close(self):
        """Close the pooled HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        logger.debug("Closed provider client", provider=self.provider)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"model={self.model}, "
            f"timeout={self.timeout}s)"
        )
