"""
Industry list normalization.

Models answer the industry question in many shapes: a JSON list, a
labelled line ("Industry: Technology."), a fenced block, several lines.
normalize_industries reduces any of them to at most three clean,
case-insensitively unique labels in their original order.
"""

import re
from typing import Any, Iterable

_FENCE = re.compile(r"^```json|```$|^```")
_INDUSTRIES_LABEL = re.compile(r"^\s*industries\s*[:=]\s*", re.IGNORECASE)
_INDUSTRY_LABEL = re.compile(r"^\s*industry\s*[:=]\s*", re.IGNORECASE)
_EDGE_QUOTES = re.compile(r"^['\"]|['\"]$")
_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]+$")


def clean_industry_label(value: Any) -> str:
    """Clean a single candidate label; returns "" when nothing is left."""
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    text = _FENCE.sub("", text)
    text = _INDUSTRIES_LABEL.sub("", text)
    text = _INDUSTRY_LABEL.sub("", text)
    text = _EDGE_QUOTES.sub("", text)
    text = text.split("\n")[0].split("\r")[0]
    text = _TRAILING_PUNCTUATION.sub("", text)
    return text.strip()


def normalize_industries(value: Any, limit: int = 3) -> list[str]:
    """
    Normalize a raw industry answer into a deduplicated list.

    Args:
        value: A string, a list of strings, or None
        limit: Maximum number of labels kept

    Returns:
        Up to `limit` labels, first occurrence wins on case-insensitive duplicates
    """
    if not value:
        return []
    items: Iterable[Any] = value if isinstance(value, list) else [value]

    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        label = clean_industry_label(item)
        if not label:
            continue
        key = label.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(label)
    return result[:limit]


def pad_industries(industries: list[str], size: int = 3) -> list[str]:
    """
    Repeat the last label until the list has `size` entries.

    Compatibility behaviour for consumers that expect exactly three
    industries; controlled by PAD_INDUSTRY_LIST.
    """
    if not industries:
        return []
    padded = list(industries[:size])
    while len(padded) < size:
        padded.append(padded[-1])
    return padded
