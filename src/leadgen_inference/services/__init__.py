"""
Caller-side services built on the orchestration core.

- decision_makers.py: identify, rank and persist decision makers
- industry.py: classify a requirement into up to three industries
"""

from leadgen_inference.services.decision_makers import identify_decision_makers
from leadgen_inference.services.exceptions import InvalidRequirementError
from leadgen_inference.services.industry import identify_industry

__all__ = [
    "identify_decision_makers",
    "identify_industry",
    "InvalidRequirementError",
]
