"""
Unit tests for ProviderOrchestrator.

Providers are scripted clients; the sleep is recorded instead of awaited,
so backoff plans can be asserted without waiting.
"""

import asyncio
import json
from typing import Any

import pytest

from leadgen_inference.llm.exceptions import LLMRateLimitError
from leadgen_inference.models.enums import ErrorCategory, FailureCategory
from leadgen_inference.models.llm_models import LLMGenerationRequest
from leadgen_inference.retry.exceptions import OrchestrationError
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.retry.policy import RetryPolicy
from leadgen_inference.validation.exceptions import ExtractionError


class EchoTask:
    """Minimal task: accepts any JSON object with an "ok" key."""

    name = "echo"

    def __init__(self):
        self.built: list[tuple[int, str]] = []

    def build_request(self, attempt: int, provider: str) -> LLMGenerationRequest:
        self.built.append((attempt, provider))
        return LLMGenerationRequest(prompt=f"attempt {attempt}")

    def interpret(self, raw_text: str) -> Any:
        try:
            value = json.loads(raw_text)
        except json.JSONDecodeError:
            raise ExtractionError("not json", raw_content=raw_text)
        if "ok" not in value:
            raise ExtractionError("missing ok", raw_content=raw_text)
        return value


OK = '{"ok": true}'


@pytest.mark.asyncio
async def test_first_attempt_success(scripted_client, make_orchestrator, recording_sleep):
    primary = scripted_client("openai", [OK])
    secondary = scripted_client("gemini", [])
    task = EchoTask()

    result = await make_orchestrator(primary, secondary).run(task)

    assert result.candidates == {"ok": True}
    assert result.provider_used == "openai"
    assert result.model_used == "openai-test-model"
    assert result.attempts_made == 1
    assert secondary.calls == 0
    assert recording_sleep.delays == []
    assert task.built == [(1, "openai")]


@pytest.mark.asyncio
async def test_unavailable_escalates_and_waits_table(
    scripted_client, make_orchestrator, recording_sleep, unavailable_error
):
    primary = scripted_client("openai", [unavailable_error, unavailable_error, unavailable_error, OK])

    result = await make_orchestrator(primary).run(EchoTask())

    # Fourth attempt only exists because the budget was extended
    assert result.attempts_made == 4
    assert len(recording_sleep.delays) == 3
    for actual, base in zip(recording_sleep.delays, (5.0, 15.0, 30.0)):
        assert base <= actual <= base * 1.2


@pytest.mark.asyncio
async def test_standard_budget_without_escalation(scripted_client, make_orchestrator, recording_sleep):
    primary = scripted_client("openai", ["nope", "nope", "nope"])
    secondary = scripted_client("gemini", [OK])

    result = await make_orchestrator(primary, secondary).run(EchoTask())

    assert primary.calls == 3
    assert result.provider_used == "gemini"
    assert result.attempts_made == 4
    # Exponential 1s, 2s between primary attempts; secondary starts fresh
    assert len(recording_sleep.delays) == 2
    assert 1.0 <= recording_sleep.delays[0] <= 1.2
    assert 2.0 <= recording_sleep.delays[1] <= 2.4


@pytest.mark.asyncio
async def test_terminal_stops_provider_immediately(
    scripted_client, make_orchestrator, recording_sleep, auth_error
):
    primary = scripted_client("openai", [auth_error])
    secondary = scripted_client("gemini", [OK])

    result = await make_orchestrator(primary, secondary).run(EchoTask())

    assert primary.calls == 1
    assert result.provider_used == "gemini"
    assert result.attempts_made == 2
    assert recording_sleep.delays == []
    assert result.attempts[0].error.category is ErrorCategory.TERMINAL
    assert result.attempts[1].succeeded


@pytest.mark.asyncio
async def test_provider_suggested_delay(scripted_client, make_orchestrator, recording_sleep):
    quota = LLMRateLimitError(
        "Gemini API error (429): Quota exceeded. Please retry in 34s.",
        status_code=429,
    )
    primary = scripted_client("openai", [quota, OK])

    await make_orchestrator(primary).run(EchoTask())

    assert len(recording_sleep.delays) == 1
    assert 34.0 <= recording_sleep.delays[0] <= 34.0 * 1.05


@pytest.mark.asyncio
async def test_unconfigured_primary_is_skipped(scripted_client, make_orchestrator):
    primary = scripted_client("openai", [OK], configured=False)
    secondary = scripted_client("gemini", [OK])

    result = await make_orchestrator(primary, secondary).run(EchoTask())

    assert primary.calls == 0
    assert result.provider_used == "gemini"
    assert result.attempts_made == 1


@pytest.mark.asyncio
async def test_no_configured_provider(scripted_client, make_orchestrator):
    primary = scripted_client("openai", [OK], configured=False)
    secondary = scripted_client("gemini", [OK], configured=False)

    with pytest.raises(OrchestrationError) as exc_info:
        await make_orchestrator(primary, secondary).run(EchoTask())

    assert exc_info.value.category is FailureCategory.MISCONFIGURED
    assert exc_info.value.http_status == 503
    assert exc_info.value.attempts_made == 0
    assert primary.calls == 0 and secondary.calls == 0


@pytest.mark.asyncio
async def test_validation_failures_surface_as_422(scripted_client, make_orchestrator):
    primary = scripted_client("openai", ["{}"] * 3)
    secondary = scripted_client("gemini", ["[]"] * 3)

    with pytest.raises(OrchestrationError) as exc_info:
        await make_orchestrator(primary, secondary).run(EchoTask())

    error = exc_info.value
    assert error.category is FailureCategory.VALIDATION_FAILED
    assert error.http_status == 422
    assert error.attempts_made == 6
    assert "missing ok" in error.user_message


@pytest.mark.asyncio
async def test_attempt_log_records_every_call(scripted_client, make_orchestrator, rate_limit_error):
    primary = scripted_client("openai", [rate_limit_error, "bad", OK])

    result = await make_orchestrator(primary).run(EchoTask())

    assert [a.attempt_number for a in result.attempts] == [1, 2, 3]
    assert [a.provider_id for a in result.attempts] == ["openai"] * 3
    assert result.attempts[0].error.category is ErrorCategory.RATE_LIMITED
    assert result.attempts[0].raw_output is None
    assert result.attempts[1].error.category is ErrorCategory.EXTRACTION_FAILED
    assert result.attempts[1].raw_output == "bad"
    assert result.raw_provenance["attempt_number"] == 3
    assert result.raw_provenance["raw_output"] == OK
    assert result.raw_provenance["task"] == "echo"


@pytest.mark.asyncio
async def test_custom_policy_budget(scripted_client, make_orchestrator):
    primary = scripted_client("openai", ["bad", "bad"])
    secondary = scripted_client("gemini", ["bad", OK])
    policy = RetryPolicy(max_attempts_standard=2, max_attempts_extended=2)

    result = await make_orchestrator(primary, secondary, policy).run(EchoTask())

    assert primary.calls == 2
    assert secondary.calls == 2
    assert result.attempts_made == 4


@pytest.mark.asyncio
async def test_cancellation_during_backoff_propagates(scripted_client, rate_limit_error):
    async def cancelled_sleep(delay: float) -> None:
        raise asyncio.CancelledError()

    primary = scripted_client("openai", [rate_limit_error, OK])
    secondary = scripted_client("gemini", [OK])
    orchestrator = ProviderOrchestrator(primary, secondary, sleep=cancelled_sleep)

    with pytest.raises(asyncio.CancelledError):
        await orchestrator.run(EchoTask())

    assert primary.calls == 1
    assert secondary.calls == 0


@pytest.mark.asyncio
async def test_concurrent_runs_do_not_share_state(scripted_client, make_orchestrator):
    primary = scripted_client("openai", ["bad", OK, OK])
    orchestrator = make_orchestrator(primary)

    first, second = await asyncio.gather(orchestrator.run(EchoTask()), orchestrator.run(EchoTask()))

    assert sorted([first.attempts_made, second.attempts_made]) == [1, 2]
