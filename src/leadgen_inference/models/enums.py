"""
Enumerations for the orchestration layer data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class IndustryRelevance(str, Enum):
    """How relevant a decision-maker role is to the requirement's industry."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProviderName(str, Enum):
    """Configured AI providers, in failover order."""

    OPENAI = "openai"
    GEMINI = "gemini"


class ErrorCategory(str, Enum):
    """
    Normalized verdict for a single failed attempt.

    The first four come from provider call failures. EXTRACTION_FAILED and
    VALIDATION_FAILED are raised after a successful call whose output could
    not be used; both are retried like transient errors.
    """

    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    NETWORK = "network"
    TERMINAL = "terminal"
    EXTRACTION_FAILED = "extraction_failed"
    VALIDATION_FAILED = "validation_failed"

    @property
    def retryable(self) -> bool:
        """Whether another attempt against the same provider is justified."""
        return self is not ErrorCategory.TERMINAL

    @property
    def extends_attempts(self) -> bool:
        """Whether this verdict switches the provider to the extended attempt budget."""
        return self in (ErrorCategory.RATE_LIMITED, ErrorCategory.UNAVAILABLE)


class FailureCategory(str, Enum):
    """
    User-facing category of an orchestration that exhausted every provider.

    Each category maps to one HTTP status for the surrounding API layer.
    """

    QUOTA_EXCEEDED = "quota_exceeded"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"
    VALIDATION_FAILED = "validation_failed"
    NETWORK = "network"
    TERMINAL = "terminal"
    MISCONFIGURED = "misconfigured"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    FailureCategory.QUOTA_EXCEEDED: 429,
    FailureCategory.RATE_LIMITED: 429,
    FailureCategory.UNAVAILABLE: 503,
    FailureCategory.VALIDATION_FAILED: 422,
    FailureCategory.NETWORK: 500,
    FailureCategory.TERMINAL: 500,
    FailureCategory.MISCONFIGURED: 503,
}
