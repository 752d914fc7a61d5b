"""
Provider retry and failover.

Failures are classified (classifier.py), waits are planned (backoff.py)
and ProviderOrchestrator runs the per-provider attempt loops with
failover from primary to secondary (orchestrator.py).

Main Components:
    - ProviderOrchestrator: Top-level driver returning OrchestrationResult
    - classify: Failure -> ErrorClassification
    - BackoffPlanner: Wait before an attempt
    - RetryPolicy / RetryState: Shared configuration / per-call bookkeeping
    - OrchestrationError: Raised when every provider is exhausted

Usage:
    >>> from leadgen_inference.retry import ProviderOrchestrator
    >>> orchestrator = ProviderOrchestrator(openai_client, gemini_client)
    >>> result = await orchestrator.run(task)
"""

from leadgen_inference.retry.backoff import BackoffPlanner
from leadgen_inference.retry.classifier import classify
from leadgen_inference.retry.exceptions import OrchestrationError
from leadgen_inference.retry.orchestrator import ProviderOrchestrator
from leadgen_inference.retry.policy import RetryPolicy, RetryState

__all__ = [
    "ProviderOrchestrator",
    "OrchestrationError",
    "BackoffPlanner",
    "RetryPolicy",
    "RetryState",
    "classify",
]
