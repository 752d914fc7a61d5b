"""
Retry policy configuration.

A RetryPolicy is built once (from Settings) and shared read-only by every
orchestration. Per-call mutable state lives in RetryState instead.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from leadgen_inference.models.enums import ErrorCategory
from leadgen_inference.models.provenance import ErrorClassification

if TYPE_CHECKING:
    from leadgen_inference.config import Settings


DEFAULT_UNAVAILABLE_DELAY_TABLE = (5.0, 15.0, 30.0, 60.0, 120.0, 180.0)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt budgets, wait table and jitter fractions.

    Attributes:
        max_attempts_standard: Attempts per provider before any overload signal
        max_attempts_extended: Attempts per provider after rate limiting/overload
        unavailable_delay_table: Waits (seconds) before attempts 2, 3, ... on "unavailable"
        base_delay: Exponential base wait in seconds (1s, 2s, 4s, ...)
        jitter_fraction: Upper bound of additive jitter for computed waits
        provider_delay_jitter_fraction: Upper bound of jitter on provider-suggested waits
    """

    max_attempts_standard: int = 3
    max_attempts_extended: int = 6
    unavailable_delay_table: tuple[float, ...] = DEFAULT_UNAVAILABLE_DELAY_TABLE
    base_delay: float = 1.0
    jitter_fraction: float = 0.2
    provider_delay_jitter_fraction: float = 0.05

    def __post_init__(self):
        if self.max_attempts_standard < 1:
            raise ValueError("max_attempts_standard must be >= 1")
        if self.max_attempts_extended < self.max_attempts_standard:
            raise ValueError("max_attempts_extended must be >= max_attempts_standard")
        if not self.unavailable_delay_table:
            raise ValueError("unavailable_delay_table must not be empty")
        if any(delay < 0 for delay in self.unavailable_delay_table) or self.base_delay < 0:
            raise ValueError("delays must be >= 0")
        if self.jitter_fraction < 0 or self.provider_delay_jitter_fraction < 0:
            raise ValueError("jitter fractions must be >= 0")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RetryPolicy":
        return cls(
            max_attempts_standard=settings.MAX_ATTEMPTS_STANDARD,
            max_attempts_extended=settings.MAX_ATTEMPTS_EXTENDED,
            unavailable_delay_table=tuple(settings.UNAVAILABLE_DELAY_TABLE),
            base_delay=settings.EXPONENTIAL_BASE_DELAY,
            jitter_fraction=settings.JITTER_FRACTION,
            provider_delay_jitter_fraction=settings.PROVIDER_DELAY_JITTER_FRACTION,
        )


@dataclass
class RetryState:
    """
    Mutable attempt bookkeeping for one provider within one orchestration.

    Escalation to the extended budget happens at most once, on the first
    rate_limited or unavailable verdict.
    """

    max_attempts: int
    extended_max_attempts: int
    attempt: int = 0
    escalated: bool = False
    last_classification: Optional[ErrorClassification] = None
    categories_seen: list[ErrorCategory] = field(default_factory=list)

    @classmethod
    def for_policy(cls, policy: RetryPolicy) -> "RetryState":
        return cls(
            max_attempts=policy.max_attempts_standard,
            extended_max_attempts=policy.max_attempts_extended,
        )

    @property
    def has_attempts_left(self) -> bool:
        return self.attempt < self.max_attempts

    def start_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    def record(self, classification: ErrorClassification) -> bool:
        """
        Record a failed attempt's verdict.

        Returns:
            True when this verdict escalated the attempt budget
        """
        self.last_classification = classification
        self.categories_seen.append(classification.category)
        if classification.category.extends_attempts and not self.escalated:
            self.escalated = True
            self.max_attempts = max(self.max_attempts, self.extended_max_attempts)
            return True
        return False
