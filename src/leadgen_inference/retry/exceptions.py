"""
Orchestration exceptions.

OrchestrationError is the only error an orchestration surfaces. Transient
failures are absorbed by the attempt loop; this is raised once every
configured provider is exhausted (or none is configured), and carries what
the API layer needs: a category, an HTTP status, a friendly message and the
full attempt log.
"""

from typing import Any, Optional, Sequence

from leadgen_inference.models.enums import ErrorCategory, FailureCategory
from leadgen_inference.models.provenance import ErrorClassification, ProviderAttempt

USER_MESSAGES = {
    FailureCategory.QUOTA_EXCEEDED: (
        "AI provider quota exceeded. You have reached the daily limit. "
        "Please wait until tomorrow or upgrade your plan."
    ),
    FailureCategory.UNAVAILABLE: (
        "AI service is temporarily overloaded. Please wait 1-2 minutes and try again."
    ),
    FailureCategory.RATE_LIMITED: (
        "AI service rate limit exceeded. Please try again in a few minutes."
    ),
    FailureCategory.VALIDATION_FAILED: (
        "AI response validation failed: {errors}. "
        "Please try again with a more detailed requirement."
    ),
    FailureCategory.MISCONFIGURED: "AI service API keys are not configured.",
    FailureCategory.NETWORK: "Unable to connect to AI service.",
    FailureCategory.TERMINAL: "Failed to get a response from the AI service.",
}

_VALIDATION_CATEGORIES = (ErrorCategory.VALIDATION_FAILED, ErrorCategory.EXTRACTION_FAILED)


def _rank(classification: ErrorClassification) -> tuple[int, FailureCategory]:
    """Lower rank = more actionable for the end user."""
    category = classification.category
    if category is ErrorCategory.RATE_LIMITED and classification.is_quota:
        return 0, FailureCategory.QUOTA_EXCEEDED
    if category is ErrorCategory.RATE_LIMITED:
        return 1, FailureCategory.RATE_LIMITED
    if category is ErrorCategory.UNAVAILABLE:
        return 2, FailureCategory.UNAVAILABLE
    if category in _VALIDATION_CATEGORIES:
        return 3, FailureCategory.VALIDATION_FAILED
    if category is ErrorCategory.NETWORK:
        return 4, FailureCategory.NETWORK
    return 5, FailureCategory.TERMINAL


class OrchestrationError(Exception):
    """
    Raised when no configured provider produced a usable answer.

    Attributes:
        category: FailureCategory chosen from every attempt (most actionable wins)
        http_status: Status the API layer should answer with
        user_message: Friendly text for end users
        attempts: Complete attempt log across providers
        last_error: Classification that determined the category
    """

    def __init__(
        self,
        category: FailureCategory,
        attempts: Sequence[ProviderAttempt] = (),
        last_error: Optional[ErrorClassification] = None,
        user_message: Optional[str] = None,
    ) -> None:
        self.category = category
        self.http_status = category.http_status
        self.attempts = list(attempts)
        self.last_error = last_error
        if user_message is None:
            user_message = USER_MESSAGES[category]
            if category is FailureCategory.VALIDATION_FAILED:
                user_message = user_message.format(
                    errors=last_error.message if last_error else "invalid output"
                )
        self.user_message = user_message

        super().__init__(
            f"Orchestration failed ({category.value}) after {len(self.attempts)} attempts: "
            f"{last_error.message if last_error else user_message}"
        )

    @classmethod
    def from_attempts(cls, attempts: Sequence[ProviderAttempt]) -> "OrchestrationError":
        """
        Build the error from an attempt log.

        Ranking: quota > rate limit > unavailable > validation > network > terminal.
        Among equally ranked verdicts the latest one is reported.
        """
        best: Optional[tuple[int, FailureCategory, ErrorClassification]] = None
        for attempt in attempts:
            if attempt.error is None:
                continue
            rank, category = _rank(attempt.error)
            if best is None or rank <= best[0]:
                best = (rank, category, attempt.error)

        if best is None:
            return cls(FailureCategory.TERMINAL, attempts=attempts)
        return cls(best[1], attempts=attempts, last_error=best[2])

    @classmethod
    def misconfigured(cls) -> "OrchestrationError":
        return cls(FailureCategory.MISCONFIGURED)

    @property
    def attempts_made(self) -> int:
        return len(self.attempts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.category.value,
            "message": self.user_message,
            "attempts": self.attempts_made,
            "providers": sorted({attempt.provider_id for attempt in self.attempts}),
        }
