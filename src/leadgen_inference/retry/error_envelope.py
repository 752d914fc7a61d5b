"""
Decoder for provider error envelopes embedded in exception messages.

Gemini errors sometimes reach us as text: an SDK or proxy stringifies the
JSON body into the outer message, e.g.

    got status: 429 Too Many Requests. {"error": {"code": 429,
    "message": "You exceeded your current quota ... {limit}",
    "status": "RESOURCE_EXHAUSTED",
    "details": [{"@type": "type.googleapis.com/google.rpc.RetryInfo",
                 "retryDelay": "34s"}]}}

The envelope is located with a balanced-brace scan that respects quoted
strings and escapes (see validation.json_scan), so braces inside string
values do not end the match early.
"""

import json
import re
from typing import Any, Iterable, Optional

from leadgen_inference.validation.json_scan import find_balanced_json

_ENVELOPE_START = re.compile(r'\{\s*"error"\s*:')
_RETRY_DELAY = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*s?\s*$")
_RETRY_IN_TEXT = re.compile(r"retry in\s+(\d+(?:\.\d+)?)\s*s", re.IGNORECASE)

RETRY_INFO_TYPE_SUFFIX = "google.rpc.RetryInfo"


def decode_error_envelope(message: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Find the first `{"error": {...}}` object in a message.

    Args:
        message: Exception message text

    Returns:
        The inner error dict (code/message/status/details), or None when no
        well-formed envelope is present
    """
    if not message:
        return None

    for match in _ENVELOPE_START.finditer(message):
        span = find_balanced_json(message, match.start())
        if span is None:
            continue
        try:
            decoded = json.loads(span)
        except json.JSONDecodeError:
            continue
        inner = decoded.get("error") if isinstance(decoded, dict) else None
        if isinstance(inner, dict):
            return inner
    return None


def parse_duration(value: Any) -> Optional[float]:
    """Parse a protobuf duration such as "34s" or "1.5s" into seconds."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value >= 0 else None
    if isinstance(value, str):
        match = _RETRY_DELAY.match(value)
        if match:
            return float(match.group(1))
    return None


def parse_retry_delay(details: Optional[Iterable[Any]]) -> Optional[float]:
    """Retry delay in seconds from a RetryInfo entry of an error's details."""
    if not details or isinstance(details, (str, bytes, dict)):
        return None
    for detail in details:
        if not isinstance(detail, dict):
            continue
        detail_type = str(detail.get("@type", ""))
        if detail_type.endswith(RETRY_INFO_TYPE_SUFFIX) or "retryDelay" in detail:
            delay = parse_duration(detail.get("retryDelay"))
            if delay is not None:
                return delay
    return None


def parse_retry_in_text(message: Optional[str]) -> Optional[float]:
    """Retry delay from a "Please retry in 34.2s" phrase."""
    if not message:
        return None
    match = _RETRY_IN_TEXT.search(message)
    return float(match.group(1)) if match else None
