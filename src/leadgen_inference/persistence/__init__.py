"""
Persistence interface for decision-maker records.

- repository.py: DecisionMakerRepository protocol and in-memory implementation

Storage Strategy:
- Records keyed by (requirement_id, role_title), upserted after each
  successful identification
"""

from leadgen_inference.persistence.repository import (
    DecisionMakerRepository,
    InMemoryDecisionMakerRepository,
)

__all__ = [
    "DecisionMakerRepository",
    "InMemoryDecisionMakerRepository",
]
