"""
Orchestration tasks: what to ask a provider and how to trust its answer.

- base.py: OrchestrationTask protocol and shared request building
- decision_makers.py: ranked decision-maker roles for a requirement
- industry.py: up to three industries for a requirement text
"""

from leadgen_inference.tasks.base import BaseOrchestrationTask, OrchestrationTask
from leadgen_inference.tasks.decision_makers import DecisionMakerTask
from leadgen_inference.tasks.industry import IndustryTask

__all__ = [
    "OrchestrationTask",
    "BaseOrchestrationTask",
    "DecisionMakerTask",
    "IndustryTask",
]
