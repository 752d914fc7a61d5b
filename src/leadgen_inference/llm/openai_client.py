"""
OpenAI client implementation (primary provider).

Communicates with the Chat Completions API using httpx AsyncClient. Supports:
- Structured output via function calling (JSON Schema parameters)
- Plain chat completions when no schema is supplied
- Token usage extraction for metrics
"""

import time
from typing import Any, Optional

import httpx
import structlog

from leadgen_inference.llm.base_client import BaseLLMClient
from leadgen_inference.llm.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMTimeoutError,
    error_from_response,
)
from leadgen_inference.models.enums import ProviderName
from leadgen_inference.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from leadgen_inference.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)


class OpenAIClient(BaseLLMClient):
    """
    OpenAI Chat Completions client.

    API Endpoint:
    - POST /chat/completions

    When the request carries a function schema the call forces that function
    and the raw output is the function call's `arguments` string.
    """

    provider = ProviderName.OPENAI.value

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, model, base_url, timeout, transport)

    def _build_payload(self, request: LLMGenerationRequest) -> dict[str, Any]:
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})

        payload: dict[str, Any] = {
            "model": request.model or self.model,
            "messages": messages,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

        if request.function_schema and request.function_name:
            payload["functions"] = [
                {
                    "name": request.function_name,
                    "description": request.function_description or request.function_name,
                    "parameters": request.function_schema,
                }
            ]
            payload["function_call"] = {"name": request.function_name}
        elif request.json_mode:
            # Only valid when the prompt itself mentions JSON, which ours always do
            payload["response_format"] = {"type": "json_object"}

        return payload

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate a completion using the Chat Completions API.

        Response (function calling):
        {
            "model": "gpt-4o-mini-2024-07-18",
            "choices": [{"message": {"function_call": {"name": "...", "arguments": "{...}"}},
                         "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 420, "completion_tokens": 180, "total_tokens": 600}
        }
        """
        start_time = time.time()
        payload = self._build_payload(request)

        logger.info(
            "Sending generation request to OpenAI",
            model=payload["model"],
            prompt_length=len(request.prompt),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            function_calling="functions" in payload,
        )

        try:
            client = await self._get_client()
            response = await client.post(
                "/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.TimeoutException as e:
            llm_latency_seconds.labels(
                provider=self.provider, model=payload["model"], success="false"
            ).observe(time.time() - start_time)
            raise LLMTimeoutError(
                f"OpenAI request timeout after {self.timeout}s",
                details={"timeout": self.timeout, "error": str(e)},
            ) from e
        except httpx.TransportError as e:
            raise LLMConnectionError(
                f"Unable to connect to OpenAI: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code >= 400:
            llm_latency_seconds.labels(
                provider=self.provider, model=payload["model"], success="false"
            ).observe(time.time() - start_time)
            error = error_from_response("OpenAI", response.status_code, response.text)
            logger.warning(
                "OpenAI HTTP error",
                status_code=response.status_code,
                error_class=type(error).__name__,
                message=error.message[:200],
            )
            raise error

        try:
            data = response.json()
            choice = data["choices"][0]
            message = choice.get("message") or {}
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMGenerationError(
                "Malformed OpenAI response body",
                details={"error": str(e)},
                status_code=response.status_code,
            ) from e

        function_call = message.get("function_call")
        if "functions" in payload:
            if not function_call or not function_call.get("arguments"):
                raise LLMGenerationError(
                    "No function call in OpenAI response",
                    details={"finish_reason": choice.get("finish_reason")},
                )
            content = function_call["arguments"]
        else:
            content = message.get("content") or ""

        if not content.strip():
            raise LLMGenerationError(
                "Empty response from OpenAI",
                details={"finish_reason": choice.get("finish_reason")},
            )

        latency_ms = int((time.time() - start_time) * 1000)
        model_version = data.get("model", payload["model"])
        usage = data.get("usage") or {}
        prompt_tokens = usage.get("prompt_tokens")
        completion_tokens = usage.get("completion_tokens")

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
            "OpenAI generation successful",
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=choice.get("finish_reason"),
        )

        return LLMGenerationResponse(
            content=content,
            provider=self.provider,
            model_version=model_version,
            finish_reason=choice.get("finish_reason") or "stop",
            usage_tokens=usage.get("total_tokens"),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
            json_mode=True,
            raw_metadata={"id": data.get("id"), "created": data.get("created")},
        )
