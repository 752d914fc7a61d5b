"""
Unit tests for the industry alignment score.
"""

import pytest

from leadgen_inference.models.enums import IndustryRelevance
from leadgen_inference.models.output_models import DecisionMakerCandidate
from leadgen_inference.validation.alignment import (
    ALIGNMENT_THRESHOLD,
    NEUTRAL_SCORE,
    check_industry_alignment,
)


def candidates(*roles: str) -> list[DecisionMakerCandidate]:
    return [
        DecisionMakerCandidate(
            role=role,
            priority=position,
            reasoning="Relevant buyer for this product",
            industry_relevance=IndustryRelevance.HIGH,
            confidence=0.8,
        )
        for position, role in enumerate(roles, start=1)
    ]


def test_partial_alignment():
    roles = candidates("CTO", "VP of Engineering", "Head of Site Reliability", "CFO", "Procurement Manager")

    result = check_industry_alignment(roles, "Technology")

    assert result.score == pytest.approx(0.4)
    assert result.aligned is True


def test_substring_match_both_directions():
    result = check_industry_alignment(candidates("Senior VP of Finance", "Treasurer"), "Finance")
    assert result.score == 1.0


def test_not_aligned():
    result = check_industry_alignment(candidates("CTO", "VP of Engineering", "Head of Site Reliability"), "Finance")

    assert result.score == 0.0
    assert result.aligned is False
    assert ALIGNMENT_THRESHOLD > 0


@pytest.mark.parametrize("industry", [None, "", "Aerospace"])
def test_unknown_industry_is_neutral(industry):
    result = check_industry_alignment(candidates("CTO"), industry)

    assert result.aligned is True
    assert result.score == NEUTRAL_SCORE


def test_no_candidates():
    result = check_industry_alignment([], "Technology")
    assert result.score == 0.0
    assert result.aligned is False
