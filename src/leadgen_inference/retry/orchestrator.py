"""
Provider orchestration with per-provider retries and failover.

State machine for one call:

    TryPrimary -> Success
               -> ExhaustedPrimary -> TrySecondary -> Success
                                                   -> ExhaustedSecondary -> Fail

Each Try state runs an attempt loop with its own RetryState: the attempt
budget starts at the standard value and is extended once, the first time
the provider reports rate limiting or overload. A terminal verdict ends
the loop immediately. Unconfigured providers are skipped.

Usage:
    orchestrator = ProviderOrchestrator(openai_client, gemini_client, policy)
    result = await orchestrator.run(DecisionMakerTask(context, prompt_builder))
"""

import asyncio
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from leadgen_inference.llm.base_client import BaseLLMClient
from leadgen_inference.logging_config import preview
from leadgen_inference.models.enums import ErrorCategory
from leadgen_inference.models.llm_models import LLMGenerationResponse
from leadgen_inference.models.output_models import OrchestrationResult
from leadgen_inference.models.provenance import ErrorClassification, ProviderAttempt
from leadgen_inference.monitoring.metrics import (
    backoff_seconds,
    orchestrations_total,
    provider_attempts_total,
    provider_errors_total,
    provider_fallbacks_total,
    validation_failures_total,
)
from leadgen_inference.retry.backoff import BackoffPlanner
from leadgen_inference.retry.classifier import classify
from leadgen_inference.retry.exceptions import OrchestrationError
from leadgen_inference.retry.policy import RetryPolicy, RetryState
from leadgen_inference.tasks.base import OrchestrationTask

logger = structlog.get_logger(__name__)

PayloadT = TypeVar("PayloadT")

Sleeper = Callable[[float], Awaitable[Any]]

_OUTPUT_CATEGORIES = (ErrorCategory.EXTRACTION_FAILED, ErrorCategory.VALIDATION_FAILED)


class ProviderOrchestrator:
    """
    Drive a task through the configured providers, in order.

    Holds no per-call state: concurrent run() calls share only the
    read-only policy and the provider clients.

    Attributes:
        providers: Provider clients in failover order (primary first)
        policy: Shared RetryPolicy
        planner: BackoffPlanner computing waits between attempts
        sleep: Awaitable used to wait; cancellation interrupts it
    """

    def __init__(
        self,
        primary: BaseLLMClient,
        secondary: Optional[BaseLLMClient] = None,
        policy: Optional[RetryPolicy] = None,
        planner: Optional[BackoffPlanner] = None,
        sleep: Sleeper = asyncio.sleep,
        classifier: Callable[[BaseException], ErrorClassification] = classify,
    ):
        self.providers = [client for client in (primary, secondary) if client is not None]
        self.policy = policy or RetryPolicy()
        self.planner = planner or BackoffPlanner(self.policy, random.Random())
        self.sleep = sleep
        self.classifier = classifier

        logger.info(
            "ProviderOrchestrator initialized",
            providers=[client.provider for client in self.providers],
            configured=[client.provider for client in self.providers if client.is_configured],
            max_attempts_standard=self.policy.max_attempts_standard,
            max_attempts_extended=self.policy.max_attempts_extended,
        )

    @property
    def configured_providers(self) -> list[BaseLLMClient]:
        return [client for client in self.providers if client.is_configured]

    async def run(self, task: OrchestrationTask[PayloadT]) -> OrchestrationResult:
        """
        Run a task until one provider yields a valid payload.

        Args:
            task: Task supplying requests and interpreting output

        Returns:
            OrchestrationResult with the payload and provenance

        Raises:
            OrchestrationError: No provider configured, or all exhausted
            asyncio.CancelledError: Propagated promptly, including mid-backoff
        """
        orchestration_id = uuid.uuid4().hex[:12]
        with structlog.contextvars.bound_contextvars(
            orchestration_id=orchestration_id, task=task.name
        ):
            providers = self.configured_providers
            if not providers:
                orchestrations_total.labels(task=task.name, outcome="failed").inc()
                logger.error("No AI provider configured")
                raise OrchestrationError.misconfigured()

            logger.info(
                "Starting orchestration",
                providers=[client.provider for client in providers],
            )

            attempts: list[ProviderAttempt] = []
            started = time.monotonic()

            for index, client in enumerate(providers):
                if index > 0:
                    previous = providers[index - 1].provider
                    provider_fallbacks_total.labels(
                        from_provider=previous, to_provider=client.provider
                    ).inc()
                    logger.warning(
                        "Falling back to next provider",
                        from_provider=previous,
                        to_provider=client.provider,
                        attempts_so_far=len(attempts),
                    )

                outcome = await self._run_provider(client, task, attempts)
                if outcome is None:
                    continue

                payload, response = outcome
                orchestrations_total.labels(task=task.name, outcome="success").inc()
                logger.info(
                    "Orchestration succeeded",
                    provider=client.provider,
                    model=response.model_version,
                    attempts_made=len(attempts),
                    duration_ms=int((time.monotonic() - started) * 1000),
                )
                return OrchestrationResult(
                    candidates=payload,
                    provider_used=client.provider,
                    model_used=response.model_version,
                    attempts_made=len(attempts),
                    attempts=attempts,
                    raw_provenance={
                        "orchestration_id": orchestration_id,
                        "task": task.name,
                        "provider": client.provider,
                        "model": response.model_version,
                        "attempt_number": attempts[-1].attempt_number,
                        "finish_reason": response.finish_reason,
                        "json_mode": response.json_mode,
                        "usage": {
                            "prompt_tokens": response.prompt_tokens,
                            "completion_tokens": response.completion_tokens,
                            "total_tokens": response.usage_tokens,
                        },
                        "raw_output": response.content,
                    },
                )

            error = OrchestrationError.from_attempts(attempts)
            orchestrations_total.labels(task=task.name, outcome="failed").inc()
            logger.error(
                "All providers exhausted",
                category=error.category.value,
                http_status=error.http_status,
                attempts_made=len(attempts),
                last_error=error.last_error.message if error.last_error else None,
            )
            raise error

    async def _run_provider(
        self,
        client: BaseLLMClient,
        task: OrchestrationTask[PayloadT],
        attempts: list[ProviderAttempt],
    ) -> Optional[tuple[PayloadT, LLMGenerationResponse]]:
        """Attempt loop for one provider; None when the provider is exhausted."""
        state = RetryState.for_policy(self.policy)

        while state.has_attempts_left:
            attempt_number = state.start_attempt()

            delay = self.planner.next_delay(attempt_number, state.last_classification)
            if delay > 0:
                category = state.last_classification.category.value if state.last_classification else "none"
                backoff_seconds.labels(provider=client.provider, category=category).observe(delay)
                logger.info(
                    "Waiting before retry",
                    provider=client.provider,
                    attempt=attempt_number,
                    max_attempts=state.max_attempts,
                    delay_seconds=round(delay, 2),
                    category=category,
                )
                await self.sleep(delay)

            request = task.build_request(attempt_number, client.provider)
            started_at = datetime.now(timezone.utc)
            started = time.monotonic()
            response: Optional[LLMGenerationResponse] = None

            logger.info(
                "Provider attempt",
                provider=client.provider,
                attempt=attempt_number,
                max_attempts=state.max_attempts,
            )

            try:
                response = await client.generate(request)
                payload = task.interpret(response.content)
            except Exception as e:
                classification = self.classifier(e)
                attempts.append(
                    ProviderAttempt(
                        provider_id=client.provider,
                        model_id=response.model_version if response else (request.model or client.model),
                        attempt_number=attempt_number,
                        started_at=started_at,
                        latency_ms=int((time.monotonic() - started) * 1000),
                        raw_output=response.content if response else None,
                        error=classification,
                    )
                )
                self._record_failure(client, task, classification, response)

                if state.record(classification):
                    logger.warning(
                        "Provider reported overload, extending attempts",
                        provider=client.provider,
                        category=classification.category.value,
                        max_attempts=state.max_attempts,
                    )

                if classification.category is ErrorCategory.TERMINAL:
                    logger.warning(
                        "Terminal error, giving up on provider",
                        provider=client.provider,
                        attempt=attempt_number,
                        status_code=classification.status_code,
                        error=classification.message[:200],
                    )
                    return None
                continue

            attempts.append(
                ProviderAttempt(
                    provider_id=client.provider,
                    model_id=response.model_version,
                    attempt_number=attempt_number,
                    started_at=started_at,
                    latency_ms=int((time.monotonic() - started) * 1000),
                    raw_output=response.content,
                )
            )
            provider_attempts_total.labels(provider=client.provider, outcome="success").inc()
            return payload, response

        logger.warning(
            "Provider attempts exhausted",
            provider=client.provider,
            attempts=state.attempt,
            escalated=state.escalated,
            last_category=state.last_classification.category.value if state.last_classification else None,
        )
        return None

    def _record_failure(
        self,
        client: BaseLLMClient,
        task: OrchestrationTask[Any],
        classification: ErrorClassification,
        response: Optional[LLMGenerationResponse],
    ) -> None:
        category = classification.category
        provider_errors_total.labels(provider=client.provider, category=category.value).inc()

        if category in _OUTPUT_CATEGORIES:
            provider_attempts_total.labels(provider=client.provider, outcome="invalid").inc()
            validation_failures_total.labels(task=task.name, error_type=category.value).inc()
            logger.warning(
                "Provider output rejected",
                provider=client.provider,
                category=category.value,
                error=classification.message[:200],
                raw_preview=preview(response.content if response else None),
            )
            return

        provider_attempts_total.labels(provider=client.provider, outcome="error").inc()
        logger.warning(
            "Provider call failed",
            provider=client.provider,
            category=category.value,
            status_code=classification.status_code,
            status=classification.status,
            suggested_retry_delay=classification.suggested_retry_delay,
            error=classification.message[:200],
        )
