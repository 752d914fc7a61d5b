"""
Industry alignment check for decision-maker recommendations.

Compares recommended roles against typical buyers of a known industry.
The score is informational: it is attached to the result and logged, never
used to reject an answer.
"""

from typing import Optional, Sequence

from leadgen_inference.models.output_models import DecisionMakerCandidate, IndustryAlignment

INDUSTRY_DECISION_MAKERS: dict[str, list[str]] = {
    "Technology": ["CTO", "VP of Engineering", "Chief Product Officer", "IT Director", "VP of Technology"],
    "Healthcare": ["Chief Medical Officer", "VP of Clinical Operations", "Healthcare Administrator", "Medical Director"],
    "Finance": ["CFO", "VP of Finance", "Chief Risk Officer", "Finance Director", "Treasurer"],
    "Retail": ["VP of Merchandising", "Retail Operations Manager", "Buyer", "Category Manager"],
    "Manufacturing": ["VP of Operations", "Plant Manager", "Operations Director", "Supply Chain Director"],
    "Sales": ["VP of Sales", "Chief Revenue Officer", "Sales Director", "Head of Sales"],
    "Marketing": ["CMO", "VP of Marketing", "Marketing Director", "Head of Growth"],
    "Education": ["Superintendent", "Principal", "Dean", "Education Director"],
    "Real Estate": ["Property Manager", "Real Estate Director", "Facilities Manager"],
    "Legal": ["General Counsel", "Legal Director", "Chief Legal Officer"],
}

ALIGNMENT_THRESHOLD = 0.3
NEUTRAL_SCORE = 0.5


def check_industry_alignment(
    candidates: Sequence[DecisionMakerCandidate],
    industry: Optional[str],
) -> IndustryAlignment:
    """
    Share of candidates whose role matches a typical role of the industry.

    A role matches when either title contains the other (case-insensitive).
    Unknown or absent industries are neutral: aligned with score 0.5.
    """
    industry_roles = INDUSTRY_DECISION_MAKERS.get(industry or "", [])
    if not industry_roles:
        return IndustryAlignment(aligned=True, score=NEUTRAL_SCORE)

    typical = [role.lower() for role in industry_roles]
    aligned_count = 0
    for candidate in candidates:
        role_key = candidate.role.lower()
        if any(t in role_key or role_key in t for t in typical):
            aligned_count += 1

    score = aligned_count / len(candidates) if candidates else 0.0
    return IndustryAlignment(aligned=score >= ALIGNMENT_THRESHOLD, score=score)
