"""
Unit tests for decision-maker validation and normalization.
"""

import copy

import pytest

from leadgen_inference.models.enums import IndustryRelevance
from leadgen_inference.validation.decision_makers import DecisionMakerValidator, clean_role_title


def entry(role="CTO", priority=1, reasoning="Owns the technology budget", relevance="high", confidence=0.9):
    return {
        "role": role,
        "priority": priority,
        "reasoning": reasoning,
        "industry_relevance": relevance,
        "confidence": confidence,
    }


@pytest.fixture
def validator() -> DecisionMakerValidator:
    return DecisionMakerValidator()


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("CEO / Chief Executive Officer", "CEO"),
        ("CTO or VP of Engineering", "CTO"),
        ("Chief Financial Officer (CFO)", "Chief Financial Officer"),
        ("  VP   of   Sales  ", "VP of Sales"),
        ("Director of Operations", "Director of Operations"),
        ("CEO  or\tFounder", "CEO"),
        ("CEO Or Founder", "CEO"),
        ("CEO OR Founder", "CEO"),
        ("(Interim) / CEO", "CEO"),
        ("Head of Vendor Relations", "Head of Vendor Relations"),
    ],
)
def test_clean_role_title(raw, expected):
    assert clean_role_title(raw) == expected
    assert clean_role_title(clean_role_title(raw)) == expected


def test_valid_list(validator, decision_makers_data):
    result = validator.validate(decision_makers_data)

    assert result.valid
    assert result.errors == []
    assert [c.role for c in result.cleaned] == [
        "CTO",
        "VP of Engineering",
        "Head of Site Reliability",
        "CFO",
        "Procurement Manager",
    ]
    assert [c.priority for c in result.cleaned] == [1, 2, 3, 4, 5]
    assert result.cleaned[3].industry_relevance is IndustryRelevance.MEDIUM


def test_input_is_not_mutated(validator):
    data = [entry("CTO / CIO", 3), entry("CFO", 1), entry("VP of Sales", 2, relevance="HIGH")]
    snapshot = copy.deepcopy(data)

    validator.validate(data)

    assert data == snapshot


def test_not_a_list(validator):
    result = validator.validate({"role": "CTO"})
    assert not result.valid
    assert result.errors == ["Decision makers must be an array"]


def test_empty_list(validator):
    result = validator.validate([])
    assert not result.valid
    assert result.errors == ["Decision makers array is empty"]


def test_too_few(validator):
    result = validator.validate([entry("CTO"), entry("CFO")])

    assert not result.valid
    assert result.errors == ["Too few decision makers (2). Minimum 3 required."]
    assert len(result.cleaned) == 2


def test_too_many(validator):
    data = [entry(f"Role {i}", priority=min(i, 10)) for i in range(1, 12)]

    result = validator.validate(data)

    assert not result.valid
    assert "Too many decision makers (11). Maximum 10 allowed." in result.errors


def test_entry_must_be_object(validator):
    result = validator.validate([entry("CTO"), "CFO", entry("CMO"), entry("COO")])

    assert not result.valid
    assert result.errors == ["Decision maker 2: Must be an object"]


def test_missing_field(validator):
    broken = entry("CFO")
    del broken["confidence"]

    result = validator.validate([entry("CTO"), broken, entry("CMO")])

    assert result.errors == ["Decision maker 2: Missing confidence"]


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"priority": 11}, "Decision maker 1: Invalid priority (must be 1-10)"),
        ({"priority": 0}, "Decision maker 1: Invalid priority (must be 1-10)"),
        ({"confidence": 1.5}, "Decision maker 1: Invalid confidence (must be 0.0 to 1.0)"),
        ({"confidence": -0.1}, "Decision maker 1: Invalid confidence (must be 0.0 to 1.0)"),
        ({"role": "   "}, "Decision maker 1: Missing or invalid role"),
        ({"reasoning": "short"}, "Decision maker 1: Reasoning too short (minimum 10 characters)"),
        (
            {"relevance": "critical"},
            'Decision maker 1: Invalid industry_relevance (must be "high", "medium", or "low")',
        ),
        ({"role": "()"}, "Decision maker 1: Role is empty after cleanup"),
    ],
)
def test_entry_violations(validator, overrides, message):
    result = validator.validate([entry(**overrides), entry("CFO"), entry("CMO")])

    assert not result.valid
    assert result.errors == [message]


def test_role_wrong_type(validator):
    result = validator.validate([entry(role=5), entry("CFO"), entry("CMO")])
    assert result.errors[0].startswith("Decision maker 1: Invalid role")


def test_duplicate_roles_case_insensitive(validator):
    result = validator.validate([entry("CTO"), entry("cto"), entry("CMO"), entry("CFO")])

    assert not result.valid
    assert result.errors == ['Decision maker 2: Duplicate role "cto"']


def test_duplicate_detected_after_cleanup(validator):
    result = validator.validate([entry("CTO / Chief Technology Officer"), entry("CTO"), entry("CMO")])
    assert result.errors == ['Decision maker 2: Duplicate role "CTO"']


def test_relevance_is_case_insensitive(validator):
    result = validator.validate([entry("CTO", relevance="HIGH"), entry("CFO", relevance=" Low "), entry("CMO")])

    assert result.valid
    assert result.cleaned[0].industry_relevance is IndustryRelevance.HIGH
    assert result.cleaned[1].industry_relevance is IndustryRelevance.LOW


def test_priorities_resequenced(validator):
    data = [entry("CTO", 7), entry("CFO", 3), entry("CMO", 9)]

    result = validator.validate(data)

    assert [(c.role, c.priority) for c in result.cleaned] == [("CFO", 1), ("CTO", 2), ("CMO", 3)]


def test_equal_priorities_keep_model_order(validator):
    data = [entry("CTO", 2), entry("CFO", 1), entry("CMO", 2)]

    result = validator.validate(data)

    assert [c.role for c in result.cleaned] == ["CFO", "CTO", "CMO"]
    assert [c.priority for c in result.cleaned] == [1, 2, 3]


def test_numeric_rounding(validator):
    data = [entry("CTO", 1.5, confidence=0.875), entry("CFO", 1), entry("CMO", 3)]

    result = validator.validate(data)

    by_role = {c.role: c for c in result.cleaned}
    assert by_role["CTO"].confidence == 0.88
    # 1.5 rounds half up to 2, after CFO (1)
    assert [c.role for c in result.cleaned] == ["CFO", "CTO", "CMO"]


def test_validation_is_idempotent(validator):
    data = [
        entry("CEO / Chief Executive Officer", 5, relevance="HIGH", confidence=0.875),
        entry("CFO", 1, relevance="medium"),
        entry("CTO or CIO", 9, reasoning="  Owns the platform roadmap  "),
    ]

    first = validator.validate(data)
    second = validator.validate(first.cleaned)

    assert first.valid
    assert second.valid
    assert second.errors == []
    assert second.cleaned == first.cleaned


def test_reasoning_is_trimmed(validator):
    result = validator.validate([entry("CTO", reasoning="   Owns the budget   "), entry("CFO"), entry("CMO")])
    assert result.cleaned[0].reasoning == "Owns the budget"


def test_custom_bounds():
    validator = DecisionMakerValidator(min_count=1, max_count=2, min_reasoning_length=3)

    assert validator.validate([entry("CTO", reasoning="abc")]).valid
    assert not validator.validate([entry("CTO"), entry("CFO"), entry("CMO")]).valid
