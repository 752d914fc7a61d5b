"""
Backoff planning between attempts.

Waits depend on why the previous attempt failed:
- provider-suggested delay (RetryInfo / "retry in Ns"): used verbatim
- unavailable: long fixed table (5s, 15s, 30s, 60s, 120s, 180s); providers
  signal sustained overload, which short exponential waits under-serve
- anything else retryable: exponential 1s, 2s, 4s, ...

Jitter is always additive: delay + delay * U(0, fraction).
"""

import random
from typing import Optional

from leadgen_inference.models.enums import ErrorCategory
from leadgen_inference.models.provenance import ErrorClassification
from leadgen_inference.retry.policy import RetryPolicy


class BackoffPlanner:
    """Compute the wait before an attempt."""

    def __init__(self, policy: Optional[RetryPolicy] = None, rng: Optional[random.Random] = None):
        """
        Args:
            policy: Retry policy (defaults to RetryPolicy())
            rng: Random source for jitter; tests pass a seeded random.Random
        """
        self.policy = policy or RetryPolicy()
        self.rng = rng or random.Random()

    def base_delay(self, attempt: int, classification: Optional[ErrorClassification]) -> tuple[float, float]:
        """
        Un-jittered wait and the jitter fraction that applies to it.

        Args:
            attempt: 1-based number of the attempt about to start
            classification: Verdict on the previous attempt (None on attempt 1)

        Returns:
            (delay_seconds, jitter_fraction)
        """
        if attempt <= 1:
            return 0.0, 0.0

        if classification is not None and classification.suggested_retry_delay is not None:
            return classification.suggested_retry_delay, self.policy.provider_delay_jitter_fraction

        if classification is not None and classification.category is ErrorCategory.UNAVAILABLE:
            table = self.policy.unavailable_delay_table
            return table[min(attempt - 2, len(table) - 1)], self.policy.jitter_fraction

        return (2 ** (attempt - 2)) * self.policy.base_delay, self.policy.jitter_fraction

    def next_delay(self, attempt: int, classification: Optional[ErrorClassification]) -> float:
        """
        Jittered wait in seconds before `attempt`.

        Always >= the un-jittered base value, never negative.
        """
        delay, fraction = self.base_delay(attempt, classification)
        if delay <= 0:
            return 0.0
        return delay + delay * self.rng.uniform(0.0, fraction)
