"""
Custom exceptions for the provider client layer.

These exceptions provide structured error handling for provider calls. Every
exception keeps the HTTP status, the provider status string and the parsed
provider error envelope, so the ErrorClassifier can decide between retrying,
waiting for a provider-suggested delay, or giving up on the provider.
"""

import json
from typing import Any, Optional


class LLMClientError(Exception):
    """
    Base exception for all provider client errors.

    All provider-specific exceptions inherit from this to allow catching
    any provider-related error with a single except clause.
    """
    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: Optional[int] = None,
        status: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        self.status = status
        self.payload = payload


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to reach the provider.

    Includes network errors, DNS failures, refused/reset connections.
    Classified as a retryable network error.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """
    Raised when a single provider call exceeds its request timeout.

    The timeout is per call, independent of the orchestration budget.
    """
    pass


class LLMRateLimitError(LLMClientError):
    """
    Raised on HTTP 429 / RESOURCE_EXHAUSTED.

    The payload may carry a RetryInfo detail with a provider-suggested delay.
    """
    pass


class LLMServiceUnavailableError(LLMClientError):
    """
    Raised on HTTP 503 / UNAVAILABLE ("model is overloaded").

    Triggers the long wait table rather than short exponential backoff.
    """
    pass


class LLMAuthenticationError(LLMClientError):
    """Raised on HTTP 401/403. Never retried against the same provider."""
    pass


class LLMGenerationError(LLMClientError):
    """
    Raised when the provider accepts the call but the output is unusable.

    Examples:
    - Malformed request (HTTP 400)
    - Empty completion
    - Missing function call arguments
    """
    pass


def error_from_response(provider: str, status_code: int, body_text: str) -> LLMClientError:
    """
    Build the matching LLMClientError from a failed HTTP response.

    Both OpenAI and Gemini wrap errors as {"error": {...}}; Gemini adds a
    numeric "code", a "status" string and "details" (RetryInfo, QuotaFailure).

    Args:
        provider: Provider name for the message
        status_code: HTTP status of the response
        body_text: Raw response body

    Returns:
        LLMClientError subclass instance (not raised)
    """
    payload: Optional[dict[str, Any]] = None
    try:
        decoded = json.loads(body_text) if body_text else None
        if isinstance(decoded, dict):
            payload = decoded
    except json.JSONDecodeError:
        payload = None

    envelope = payload.get("error") if payload else None
    if not isinstance(envelope, dict):
        envelope = {}

    message = envelope.get("message") or body_text[:500] or f"HTTP {status_code}"
    status = envelope.get("status")
    if not isinstance(status, str):
        status = None

    details = {"provider": provider, "status_code": status_code}
    if envelope.get("type"):
        details["error_type"] = envelope["type"]
    if envelope.get("code") is not None:
        details["error_code"] = envelope["code"]

    full_message = f"{provider} API error ({status_code}): {message}"
    kwargs = dict(
        details=details,
        status_code=status_code,
        status=status,
        payload=payload,
    )

    if status_code == 429 or status == "RESOURCE_EXHAUSTED":
        return LLMRateLimitError(full_message, **kwargs)
    if status_code == 503 or status == "UNAVAILABLE":
        return LLMServiceUnavailableError(full_message, **kwargs)
    if status_code in (401, 403) or status in ("UNAUTHENTICATED", "PERMISSION_DENIED"):
        return LLMAuthenticationError(full_message, **kwargs)
    return LLMGenerationError(full_message, **kwargs)
