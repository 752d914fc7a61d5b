"""
Unit tests for OrchestrationError category selection.
"""

from datetime import datetime, timezone

import pytest

from leadgen_inference.models.enums import ErrorCategory, FailureCategory
from leadgen_inference.models.provenance import ErrorClassification, ProviderAttempt
from leadgen_inference.retry.exceptions import OrchestrationError


def failed(provider: str, number: int, category: ErrorCategory, message: str = "boom", is_quota=False):
    return ProviderAttempt(
        provider_id=provider,
        model_id=f"{provider}-model",
        attempt_number=number,
        started_at=datetime.now(timezone.utc),
        error=ErrorClassification(category=category, message=message, is_quota=is_quota),
    )


def test_quota_outranks_everything():
    attempts = [
        failed("openai", 1, ErrorCategory.RATE_LIMITED, "quota", is_quota=True),
        failed("gemini", 1, ErrorCategory.UNAVAILABLE),
        failed("gemini", 2, ErrorCategory.TERMINAL),
    ]

    error = OrchestrationError.from_attempts(attempts)

    assert error.category is FailureCategory.QUOTA_EXCEEDED
    assert error.http_status == 429
    assert "quota exceeded" in error.user_message.lower()


@pytest.mark.parametrize(
    "categories,expected,status",
    [
        ([ErrorCategory.UNAVAILABLE, ErrorCategory.RATE_LIMITED], FailureCategory.RATE_LIMITED, 429),
        ([ErrorCategory.NETWORK, ErrorCategory.UNAVAILABLE], FailureCategory.UNAVAILABLE, 503),
        ([ErrorCategory.NETWORK, ErrorCategory.EXTRACTION_FAILED], FailureCategory.VALIDATION_FAILED, 422),
        ([ErrorCategory.TERMINAL, ErrorCategory.NETWORK], FailureCategory.NETWORK, 500),
        ([ErrorCategory.TERMINAL, ErrorCategory.TERMINAL], FailureCategory.TERMINAL, 500),
    ],
)
def test_category_ranking(categories, expected, status):
    attempts = [failed("openai", i, category) for i, category in enumerate(categories, start=1)]

    error = OrchestrationError.from_attempts(attempts)

    assert error.category is expected
    assert error.http_status == status


def test_latest_verdict_wins_on_ties():
    attempts = [
        failed("openai", 1, ErrorCategory.VALIDATION_FAILED, "Too few decision makers (2). Minimum 3 required."),
        failed("gemini", 1, ErrorCategory.VALIDATION_FAILED, "Decision makers array is empty"),
    ]

    error = OrchestrationError.from_attempts(attempts)

    assert error.last_error.message == "Decision makers array is empty"
    assert "Decision makers array is empty" in error.user_message


def test_no_failed_attempts_is_terminal():
    error = OrchestrationError.from_attempts([])
    assert error.category is FailureCategory.TERMINAL
    assert error.last_error is None


def test_misconfigured():
    error = OrchestrationError.misconfigured()

    assert error.http_status == 503
    assert error.to_dict() == {
        "error": "misconfigured",
        "message": "AI service API keys are not configured.",
        "attempts": 0,
        "providers": [],
    }


def test_to_dict_lists_providers():
    attempts = [
        failed("openai", 1, ErrorCategory.TERMINAL),
        failed("gemini", 1, ErrorCategory.TERMINAL),
    ]

    payload = OrchestrationError.from_attempts(attempts).to_dict()

    assert payload["error"] == "terminal"
    assert payload["attempts"] == 2
    assert payload["providers"] == ["gemini", "openai"]
    # Raw provider messages never reach end users
    assert "boom" not in payload["message"]
