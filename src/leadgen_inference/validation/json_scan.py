"""
Low-level JSON span scanning shared by the extractor and the error decoder.

Grammar recognised by find_balanced_json:
    span    := opener (string | other | span)* closer
    opener  := "{" | "["      closer := the matching "}" | "]"
    string  := '"' (escape | any char except '"' and '\\')* '"'
    escape  := '\\' any char

Braces inside strings are ignored, so messages whose string values contain
"{" or "}" are still delimited correctly. Mismatched closers end the scan.
"""

import re
from typing import Optional

OPENERS = "{["
CLOSERS = {"{": "}", "[": "]"}

_TRAILING_COMMA = re.compile(r",(\s*[\]}])")


def strip_trailing_commas(text: str) -> str:
    """Remove commas directly before a closing bracket or brace."""
    return _TRAILING_COMMA.sub(r"\1", text)


def find_balanced_json(text: str, start: int) -> Optional[str]:
    """
    Return the balanced span starting at text[start], or None.

    Args:
        text: Text to scan
        start: Index of an opening "{" or "["

    Returns:
        The substring from the opener to its matching closer (inclusive),
        or None when the opener is never closed.
    """
    if start < 0 or start >= len(text) or text[start] not in OPENERS:
        return None

    stack: list[str] = []
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in OPENERS:
            stack.append(CLOSERS[char])
        elif char in "}]":
            if not stack or stack[-1] != char:
                return None
            stack.pop()
            if not stack:
                return text[start:index + 1]

    return None


def first_opener(text: str, start: int = 0) -> int:
    """Index of the first "{" or "[" at or after start, -1 when absent."""
    positions = [pos for pos in (text.find("{", start), text.find("[", start)) if pos != -1]
    return min(positions) if positions else -1
