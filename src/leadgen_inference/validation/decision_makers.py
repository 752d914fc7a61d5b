"""
Decision-maker list validation and normalization.

Rejects (no partial acceptance):
- Non-list or empty payloads, lists outside the count bounds
- Entries missing role/priority/reasoning/industry_relevance/confidence
- Reasoning shorter than the minimum, unknown relevance levels,
  confidence outside [0, 1], duplicate roles (case-insensitive)

Repairs:
- Role titles offering alternatives ("CEO / Chief Executive Officer",
  "CTO or VP of Engineering") keep the first option
- Parenthetical asides and redundant whitespace are removed
- Priorities are sorted and re-sequenced densely as 1..N
"""

import math
import re
from typing import Any, Mapping

import structlog
from pydantic import BaseModel, ConfigDict, Field

from leadgen_inference.models.enums import IndustryRelevance
from leadgen_inference.models.output_models import DecisionMakerCandidate
from leadgen_inference.validation.schemas import RELEVANCE_LEVELS, entry_validator

logger = structlog.get_logger(__name__)

_ALTERNATIVE_SEPARATORS = re.compile(r"/|\bor\b", re.IGNORECASE)
_PARENTHETICAL = re.compile(r"\([^)]*\)")
_WHITESPACE = re.compile(r"\s+")


class DecisionMakerValidation(BaseModel):
    """Outcome of validating one decision-maker list."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: list[str] = Field(default_factory=list)
    cleaned: list[DecisionMakerCandidate] = Field(default_factory=list)


def clean_role_title(role: str) -> str:
    """
    Reduce a role to a single clean title.

    >>> clean_role_title("CEO / Chief Executive Officer")
    'CEO'
    >>> clean_role_title("Chief Financial Officer (CFO)")
    'Chief Financial Officer'
    >>> clean_role_title("(Interim) / CEO")
    'CEO'
    """
    cleaned = _PARENTHETICAL.sub("", _WHITESPACE.sub(" ", role))
    options = [_WHITESPACE.sub(" ", opt).strip() for opt in _ALTERNATIVE_SEPARATORS.split(cleaned)]
    return next((opt for opt in options if opt), "")


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _describe_schema_error(error) -> str:
    if error.validator == "required":
        missing = error.message.split("'")[1] if "'" in error.message else "field"
        return f"Missing {missing}"
    field = error.path[0] if error.path else "entry"
    if field == "priority":
        return "Invalid priority (must be 1-10)"
    if field == "confidence":
        return "Invalid confidence (must be 0.0 to 1.0)"
    return f"Invalid {field}: {error.message}"


class DecisionMakerValidator:
    """
    Validate and normalize a decision-maker list.

    Never mutates its input; returns a fresh DecisionMakerValidation.
    """

    def __init__(
        self,
        min_count: int = 3,
        max_count: int = 10,
        min_reasoning_length: int = 10,
    ):
        self.min_count = min_count
        self.max_count = max_count
        self.min_reasoning_length = min_reasoning_length

    def validate(self, decision_makers: Any) -> DecisionMakerValidation:
        """
        Validate a parsed decision-maker payload.

        Args:
            decision_makers: Value extracted from provider output (expected list of objects)

        Returns:
            DecisionMakerValidation; valid iff no violations and at least
            min_count cleaned entries
        """
        if not isinstance(decision_makers, list):
            return DecisionMakerValidation(valid=False, errors=["Decision makers must be an array"])

        if not decision_makers:
            return DecisionMakerValidation(valid=False, errors=["Decision makers array is empty"])

        errors: list[str] = []
        count = len(decision_makers)
        if count < self.min_count:
            errors.append(f"Too few decision makers ({count}). Minimum {self.min_count} required.")
        if count > self.max_count:
            errors.append(f"Too many decision makers ({count}). Maximum {self.max_count} allowed.")

        entries: list[dict[str, Any]] = []
        seen_roles: set[str] = set()

        for index, entry in enumerate(decision_makers, start=1):
            if isinstance(entry, BaseModel):
                entry = entry.model_dump(mode="json")
            if not isinstance(entry, Mapping):
                errors.append(f"Decision maker {index}: Must be an object")
                continue

            schema_errors = sorted(entry_validator.iter_errors(dict(entry)), key=lambda e: list(e.path))
            if schema_errors:
                errors.append(f"Decision maker {index}: {_describe_schema_error(schema_errors[0])}")
                continue

            raw_role = entry["role"].strip()
            if not raw_role:
                errors.append(f"Decision maker {index}: Missing or invalid role")
                continue

            reasoning = entry["reasoning"].strip()
            if len(reasoning) < self.min_reasoning_length:
                errors.append(
                    f"Decision maker {index}: Reasoning too short "
                    f"(minimum {self.min_reasoning_length} characters)"
                )
                continue

            relevance = entry["industry_relevance"].strip().lower()
            if relevance not in RELEVANCE_LEVELS:
                errors.append(
                    f'Decision maker {index}: Invalid industry_relevance '
                    f'(must be "high", "medium", or "low")'
                )
                continue

            role = clean_role_title(raw_role)
            if not role:
                errors.append(f"Decision maker {index}: Role is empty after cleanup")
                continue
            if role != raw_role:
                logger.debug("Cleaned role title", original=raw_role, cleaned=role)

            role_key = role.lower()
            if role_key in seen_roles:
                errors.append(f'Decision maker {index}: Duplicate role "{role}"')
                continue
            seen_roles.add(role_key)

            entries.append({
                "role": role,
                "priority": int(_round_half_up(entry["priority"])),
                "reasoning": reasoning,
                "industry_relevance": IndustryRelevance(relevance),
                "confidence": _round_half_up(entry["confidence"], 2),
            })

        # Stable sort keeps model order for equal priorities
        entries.sort(key=lambda item: item["priority"])
        cleaned = [
            DecisionMakerCandidate(**{**item, "priority": position})
            for position, item in enumerate(entries, start=1)
        ]

        valid = not errors and len(cleaned) >= self.min_count
        if not valid:
            logger.info(
                "Decision-maker validation failed",
                error_count=len(errors),
                cleaned_count=len(cleaned),
                errors=errors[:5],
            )
        return DecisionMakerValidation(valid=valid, errors=errors, cleaned=cleaned)
