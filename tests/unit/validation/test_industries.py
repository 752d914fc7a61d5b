"""
Unit tests for industry label normalization.
"""

import pytest

from leadgen_inference.validation.industries import (
    clean_industry_label,
    normalize_industries,
    pad_industries,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Technology", "Technology"),
        ("Industry: Technology.", "Technology"),
        ("industries = Healthcare", "Healthcare"),
        ('"Retail"', "Retail"),
        ("Finance\nBanking", "Finance"),
        ("  Real Estate!! ", "Real Estate"),
        ("```json", ""),
        (None, ""),
        ("   ", ""),
    ],
)
def test_clean_industry_label(raw, expected):
    assert clean_industry_label(raw) == expected


def test_normalize_list_dedupes_case_insensitively():
    raw = ["Technology", "technology", "Software", "", " IT Services ", "Cloud"]

    assert normalize_industries(raw) == ["Technology", "Software", "IT Services"]


def test_normalize_string():
    assert normalize_industries("Industry: Healthcare.") == ["Healthcare"]


def test_normalize_respects_limit():
    assert normalize_industries(["A", "B", "C"], limit=1) == ["A"]


@pytest.mark.parametrize("raw", [None, "", [], ["", "  "]])
def test_normalize_empty(raw):
    assert normalize_industries(raw) == []


def test_normalize_non_string_items():
    assert normalize_industries([42, "Retail"]) == ["42", "Retail"]


@pytest.mark.parametrize(
    "industries,expected",
    [
        (["Technology"], ["Technology", "Technology", "Technology"]),
        (["Technology", "Software"], ["Technology", "Software", "Software"]),
        (["A", "B", "C", "D"], ["A", "B", "C"]),
        ([], []),
    ],
)
def test_pad_industries(industries, expected):
    assert pad_industries(industries) == expected


def test_pad_does_not_mutate():
    industries = ["Technology"]
    pad_industries(industries)
    assert industries == ["Technology"]
