"""
Error classification for provider failures.

classify() turns whatever a provider call raised into an ErrorClassification.
It looks at the HTTP status, the provider status string, the parsed error
envelope (from the exception payload or embedded in the message text) and
the message itself. Rules, first match wins:

1. 503 / UNAVAILABLE / "overloaded"                 -> unavailable
2. 429 / RESOURCE_EXHAUSTED / "quota" / "rate limit" -> rate_limited
   (with the provider-suggested delay when one is present)
3. connection, DNS and timeout failures              -> network
4. anything else (auth, malformed request, ...)      -> terminal

Output that was received but could not be used is classified up front as
extraction_failed / validation_failed.
"""

import asyncio
from typing import Any, Optional

import httpx

from leadgen_inference.llm.exceptions import (
    LLMConnectionError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
)
from leadgen_inference.models.enums import ErrorCategory
from leadgen_inference.models.provenance import ErrorClassification
from leadgen_inference.retry.error_envelope import (
    decode_error_envelope,
    parse_retry_delay,
    parse_retry_in_text,
)
from leadgen_inference.validation.exceptions import ExtractionError, ValidationError

MAX_MESSAGE_CHARS = 500

UNAVAILABLE_STATUSES = frozenset({"UNAVAILABLE"})
RATE_LIMIT_STATUSES = frozenset({"RESOURCE_EXHAUSTED", "RATE_LIMIT_EXCEEDED"})

UNAVAILABLE_FRAGMENTS = ("overloaded", "temporarily unavailable")
RATE_LIMIT_FRAGMENTS = ("quota", "rate limit")
QUOTA_FRAGMENTS = ("quota", "exceeded")
NETWORK_FRAGMENTS = (
    "network",
    "timeout",
    "timed out",
    "econnrefused",
    "econnreset",
    "etimedout",
    "enotfound",
    "getaddrinfo",
    "connection refused",
    "connection reset",
    "name resolution",
)

NETWORK_EXCEPTIONS = (
    LLMConnectionError,
    httpx.TransportError,
    httpx.TimeoutException,
    asyncio.TimeoutError,
    ConnectionError,
    TimeoutError,
)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _status_code_of(err: BaseException) -> Optional[int]:
    code = _as_int(getattr(err, "status_code", None))
    if code is None:
        code = _as_int(getattr(err, "code", None))
    if code is None and isinstance(err, httpx.HTTPStatusError):
        code = err.response.status_code
    return code


def _envelope_of(err: BaseException, message: str) -> Optional[dict[str, Any]]:
    payload = getattr(err, "payload", None)
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return payload["error"]
    return decode_error_envelope(message)


def classify(err: BaseException) -> ErrorClassification:
    """
    Classify a failed attempt.

    Pure function: no logging, no metrics.

    Args:
        err: Exception raised by a provider call or by output interpretation

    Returns:
        ErrorClassification with category, message and optional retry delay
    """
    outer_message = getattr(err, "message", None)
    if not isinstance(outer_message, str) or not outer_message:
        outer_message = str(err) or type(err).__name__

    if isinstance(err, ExtractionError):
        return ErrorClassification(
            category=ErrorCategory.EXTRACTION_FAILED,
            message=outer_message[:MAX_MESSAGE_CHARS],
        )
    if isinstance(err, ValidationError):
        return ErrorClassification(
            category=ErrorCategory.VALIDATION_FAILED,
            message=outer_message[:MAX_MESSAGE_CHARS],
        )

    codes: set[int] = set()
    statuses: set[str] = set()
    outer_code = _status_code_of(err)
    if outer_code is not None:
        codes.add(outer_code)
    outer_status = getattr(err, "status", None)
    if isinstance(outer_status, str):
        statuses.add(outer_status.upper())

    envelope = _envelope_of(err, outer_message)
    details = None
    message = outer_message
    if envelope:
        envelope_code = _as_int(envelope.get("code"))
        if envelope_code is not None:
            codes.add(envelope_code)
        if isinstance(envelope.get("status"), str):
            statuses.add(envelope["status"].upper())
        if isinstance(envelope.get("message"), str) and envelope["message"]:
            message = envelope["message"]
        details = envelope.get("details")

    text = f"{outer_message} {message}"
    lowered = text.lower()

    status_code = outer_code if outer_code is not None else (min(codes) if codes else None)
    status = next(iter(sorted(statuses)), None)
    message = message[:MAX_MESSAGE_CHARS]

    if (
        isinstance(err, LLMServiceUnavailableError)
        or 503 in codes
        or statuses & UNAVAILABLE_STATUSES
        or "UNAVAILABLE" in text
        or any(fragment in lowered for fragment in UNAVAILABLE_FRAGMENTS)
    ):
        return ErrorClassification(
            category=ErrorCategory.UNAVAILABLE,
            message=message,
            status_code=status_code,
            status=status,
        )

    if (
        isinstance(err, LLMRateLimitError)
        or 429 in codes
        or statuses & RATE_LIMIT_STATUSES
        or any(fragment in lowered for fragment in RATE_LIMIT_FRAGMENTS)
    ):
        delay = parse_retry_delay(details)
        if delay is None:
            delay = parse_retry_in_text(text)
        return ErrorClassification(
            category=ErrorCategory.RATE_LIMITED,
            message=message,
            suggested_retry_delay=delay,
            status_code=status_code,
            status=status,
            is_quota=(
                "RESOURCE_EXHAUSTED" in statuses
                or any(fragment in lowered for fragment in QUOTA_FRAGMENTS)
            ),
        )

    if isinstance(err, NETWORK_EXCEPTIONS) or any(
        fragment in lowered for fragment in NETWORK_FRAGMENTS
    ):
        return ErrorClassification(
            category=ErrorCategory.NETWORK,
            message=message,
            status_code=status_code,
            status=status,
        )

    return ErrorClassification(
        category=ErrorCategory.TERMINAL,
        message=message,
        status_code=status_code,
        status=status,
    )
