"""
Response extraction: recover the intended JSON value from provider text.

Language models do not reliably honour "return JSON only". Output arrives
wrapped in markdown fences, surrounded by commentary, with trailing commas,
or as a bare word. Strategies are tried in order and the first success wins:

1. Direct scan: the first "[" or "{" up to the last matching closer
   (greedy), then the balanced span from each opener.
2. Fence cleanup: drop backticks and the word "json", trim to the first
   opener / last closer, then the greedy array and object spans,
   outermost first.
3. Whole cleaned text parsed as JSON.
4. Bare scalar: cleaned text without any "{" or "[", quotes stripped.
5. ExtractionError with a truncated preview.
"""

import json
import re
from typing import Any, Optional

import structlog

from leadgen_inference.logging_config import preview
from leadgen_inference.validation.exceptions import ExtractionError
from leadgen_inference.validation.json_scan import (
    CLOSERS,
    find_balanced_json,
    first_opener,
    strip_trailing_commas,
)

logger = structlog.get_logger(__name__)

_BACKTICKS = re.compile(r"`+")
_JSON_WORD = re.compile(r"\bjson\b", re.IGNORECASE)
_GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")
_GREEDY_ARRAY = re.compile(r"\[[\s\S]*\]")
_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")

_NOT_FOUND = object()


def _loads(candidate: Optional[str]) -> Any:
    """json.loads as-is, then without trailing commas; _NOT_FOUND on failure."""
    if not candidate:
        return _NOT_FOUND
    for text in (candidate, strip_trailing_commas(candidate)):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            continue
    return _NOT_FOUND


def _direct_scan(raw: str) -> Any:
    start = first_opener(raw)
    if start == -1:
        return _NOT_FOUND

    end = raw.rfind(CLOSERS[raw[start]])
    if end > start:
        value = _loads(raw[start:end + 1])
        if value is not _NOT_FOUND:
            return value

    position = start
    while position != -1:
        value = _loads(find_balanced_json(raw, position))
        if value is not _NOT_FOUND:
            return value
        position = first_opener(raw, position + 1)
    return _NOT_FOUND


def clean_fences(raw: str) -> str:
    """Strip backtick fencing and the word "json" that wraps model output."""
    cleaned = _BACKTICKS.sub("", raw)
    cleaned = _JSON_WORD.sub("", cleaned)
    return cleaned.strip()


def _trim_to_brackets(cleaned: str) -> str:
    start = first_opener(cleaned)
    if start > 0:
        cleaned = cleaned[start:]
    end = max(cleaned.rfind("]"), cleaned.rfind("}"))
    if 0 < end < len(cleaned) - 1:
        cleaned = cleaned[:end + 1]
    return cleaned


def parse_greedy_span(cleaned: str) -> Any:
    """
    Parse the greedy object span and the greedy array span of cleaned text.

    Both are tried, outermost (earliest opener) first, so a failed object
    span inside an array does not hide the array.
    """
    matches = [m for m in (_GREEDY_ARRAY.search(cleaned), _GREEDY_OBJECT.search(cleaned)) if m]
    for match in sorted(matches, key=lambda m: m.start()):
        value = _loads(match.group(0).strip())
        if value is not _NOT_FOUND:
            return value
    return _NOT_FOUND


def extract_json(raw_text: str) -> Any:
    """
    Extract a JSON value (or bare scalar string) from provider output.

    Args:
        raw_text: Raw provider text

    Returns:
        Parsed JSON value (dict, list, str, number, bool, None) or the
        trimmed, quote-stripped text when the answer is a bare scalar

    Raises:
        ExtractionError: If no strategy recovers a value
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise ExtractionError("Provider output is empty", raw_content=raw_text or "")

    value = _direct_scan(raw_text)
    if value is not _NOT_FOUND:
        logger.debug("Extracted JSON by direct scan", length=len(raw_text))
        return value

    cleaned = _trim_to_brackets(clean_fences(raw_text))

    value = parse_greedy_span(cleaned)
    if value is not _NOT_FOUND:
        logger.debug("Extracted JSON after fence cleanup", length=len(raw_text))
        return value

    value = _loads(cleaned)
    if value is not _NOT_FOUND:
        logger.debug("Parsed full cleaned content", length=len(raw_text))
        return value

    scalar = _SURROUNDING_QUOTES.sub("", cleaned.strip())
    if scalar and "{" not in scalar and "[" not in scalar:
        logger.info("Treating plain text response as value", value=preview(scalar, 100))
        return scalar

    logger.warning(
        "All extraction strategies failed",
        content_preview=preview(raw_text),
    )
    raise ExtractionError(
        "Failed to extract valid JSON from provider output",
        raw_content=raw_text,
    )


class ResponseExtractor:
    """
    Stateless extractor object for injection into tasks.

    Wraps extract_json so tests and tasks can substitute a stub.
    """

    def extract(self, raw_text: str) -> Any:
        return extract_json(raw_text)
