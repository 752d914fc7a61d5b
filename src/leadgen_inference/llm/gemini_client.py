"""
Gemini client implementation (secondary provider).

Communicates with the Generative Language REST API using httpx AsyncClient.
Supports:
- JSON output mode (responseMimeType: application/json)
- Plain-text fallback when a model rejects JSON mode
- Structured error envelopes (status, RetryInfo details) passed through to
  the ErrorClassifier
"""

import time
from typing import Any, Optional

import httpx
import structlog

from leadgen_inference.llm.base_client import BaseLLMClient
from leadgen_inference.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMTimeoutError,
    error_from_response,
)
from leadgen_inference.models.enums import ProviderName
from leadgen_inference.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from leadgen_inference.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)


DEFAULT_PLAIN_TEXT_SUFFIX = (
    "\n\nCRITICAL INSTRUCTIONS:\n"
    "- Return ONLY valid JSON\n"
    "- Do NOT use markdown code blocks (no ```json or ```)\n"
    "- Do NOT include any explanations or text before/after JSON\n"
    "- Start directly with [ or {\n"
    "- End directly with ] or }"
)

# Plain-text mode is less reliable, keep sampling conservative
PLAIN_TEXT_MAX_TEMPERATURE = 0.2


class GeminiClient(BaseLLMClient):
    """
    Gemini generateContent client.

    API Endpoint:
    - POST /models/{model}:generateContent

    Features:
    - JSON mode first; one plain-text retry inside the same call when JSON
      mode fails with an error that retrying would not fix
    - Retryable failures (429/503) propagate immediately so the orchestrator
      can apply backoff and escalation
    """

    provider = ProviderName.GEMINI.value

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, model, base_url, timeout, transport)

    def _build_payload(self, request: LLMGenerationRequest, json_mode: bool) -> dict[str, Any]:
        prompt = request.prompt
        generation_config: dict[str, Any] = {
            "temperature": request.temperature,
            "maxOutputTokens": request.max_tokens,
        }
        if json_mode:
            generation_config["responseMimeType"] = "application/json"
        else:
            prompt = prompt + (request.plain_text_suffix or DEFAULT_PLAIN_TEXT_SUFFIX)
            generation_config["temperature"] = min(request.temperature, PLAIN_TEXT_MAX_TEMPERATURE)

        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        if request.system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": request.system_prompt}]}
        return payload

    @staticmethod
    def _allows_plain_text_fallback(error: LLMClientError) -> bool:
        """JSON mode gets one plain-text retry unless the failure is transient."""
        return isinstance(error, LLMGenerationError) and error.status_code not in (429, 503)

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion, trying JSON mode first.

        Response:
        {
            "candidates": [{"content": {"parts": [{"text": "..."}]}, "finishReason": "STOP"}],
            "usageMetadata": {"promptTokenCount": 300, "candidatesTokenCount": 200,
                              "totalTokenCount": 500},
            "modelVersion": "gemini-2.5-flash"
        }
        """
        if not request.json_mode:
            return await self._generate_once(request, json_mode=False)

        try:
            return await self._generate_once(request, json_mode=True)
        except LLMClientError as e:
            if not self._allows_plain_text_fallback(e):
                raise
            logger.warning(
                "JSON mode rejected, retrying in plain-text mode",
                model=request.model or self.model,
                status_code=e.status_code,
                error=e.message[:200],
            )
            return await self._generate_once(request, json_mode=False)

    async def _generate_once(
        self, request: LLMGenerationRequest, json_mode: bool
    ) -> LLMGenerationResponse:
        start_time = time.time()
        model = request.model or self.model
        payload = self._build_payload(request, json_mode)

        logger.info(
            "Sending generation request to Gemini",
            model=model,
            prompt_length=len(request.prompt),
            temperature=payload["generationConfig"]["temperature"],
            max_tokens=request.max_tokens,
            json_mode=json_mode,
        )

        try:
            client = await self._get_client()
            response = await client.post(
                f"/models/{model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": self.api_key or ""},
            )
        except httpx.TimeoutException as e:
            llm_latency_seconds.labels(
                provider=self.provider, model=model, success="false"
            ).observe(time.time() - start_time)
            raise LLMTimeoutError(
                f"Gemini request timeout after {self.timeout}s",
                details={"timeout": self.timeout, "error": str(e)},
            ) from e
        except httpx.TransportError as e:
            raise LLMConnectionError(
                f"Unable to connect to Gemini: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code >= 400:
            llm_latency_seconds.labels(
                provider=self.provider, model=model, success="false"
            ).observe(time.time() - start_time)
            error = error_from_response("Gemini", response.status_code, response.text)
            logger.warning(
                "Gemini HTTP error",
                status_code=response.status_code,
                status=error.status,
                error_class=type(error).__name__,
                json_mode=json_mode,
            )
            raise error

        try:
            data = response.json()
        except ValueError as e:
            raise LLMGenerationError(
                "Malformed Gemini response body",
                details={"error": str(e)},
                status_code=response.status_code,
            ) from e

        candidates = data.get("candidates") or []
        parts = []
        finish_reason = None
        if candidates:
            first = candidates[0]
            finish_reason = first.get("finishReason")
            parts = (first.get("content") or {}).get("parts") or []
        content = "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()

        if not content:
            raise LLMGenerationError(
                "Empty response from Gemini",
                details={
                    "finish_reason": finish_reason,
                    "prompt_feedback": data.get("promptFeedback"),
                },
            )

        latency_ms = int((time.time() - start_time) * 1000)
        model_version = data.get("modelVersion") or model
        usage = data.get("usageMetadata") or {}
        prompt_tokens = usage.get("promptTokenCount")
        completion_tokens = usage.get("candidatesTokenCount")

        llm_latency_seconds.labels(
            provider=self.provider, model=model_version, success="true"
        ).observe(latency_ms / 1000.0)
        if prompt_tokens:
            llm_tokens_total.labels(
                provider=self.provider, model=model_version, token_type="prompt"
            ).inc(prompt_tokens)
        if completion_tokens:
            llm_tokens_total.labels(
                provider=self.provider, model=model_version, token_type="completion"
            ).inc(completion_tokens)

        logger.info(
            "Gemini generation successful",
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=finish_reason,
            json_mode=json_mode,
        )

        return LLMGenerationResponse(
            content=content,
            provider=self.provider,
            model_version=model_version,
            finish_reason=(finish_reason or "STOP").lower(),
            usage_tokens=usage.get("totalTokenCount"),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
            json_mode=json_mode,
            raw_metadata={"response_id": data.get("responseId")},
        )
