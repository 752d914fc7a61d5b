"""
Validation-specific exceptions for provider output.

These exceptions are raised after a provider call succeeded but its output
could not be used. The orchestrator catches them and treats them as
retryable: a malformed answer is grounds for asking again, up to the
attempt budget.
"""

from typing import Any

from leadgen_inference.logging_config import PREVIEW_CHARS


class ValidationError(Exception):
    """
    Base exception for all validation errors.

    Raised when extraction or validation of provider output fails.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error description
            details: Structured error data for logging/metrics
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ExtractionError(ValidationError):
    """
    No JSON value or scalar answer could be recovered from the output.

    Carries a truncated preview of the original text for diagnostics.
    """

    def __init__(self, message: str, raw_content: str | None = None):
        """
        Initialize extraction error.

        Args:
            message: Error description
            raw_content: Original provider text; only a preview is kept
        """
        self.content_preview = (raw_content or "")[:PREVIEW_CHARS]
        super().__init__(message, {"content_preview": self.content_preview})


class DecisionMakerValidationError(ValidationError):
    """
    The decision-maker list violates structural or semantic constraints.

    No partial acceptance: any violation rejects the whole list.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        """
        Initialize decision-maker validation error.

        Args:
            message: Error description
            errors: Every violation found (limited to first 20 in details)
        """
        self.errors = list(errors or [])
        super().__init__(message, {"errors": self.errors[:20]})


class IndustryValidationError(ValidationError):
    """No usable industry label survived normalization."""
    pass
