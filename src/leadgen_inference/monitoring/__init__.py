"""Monitoring and metrics instrumentation for the orchestration layer.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from leadgen_inference.monitoring.metrics import (
    backoff_seconds,
    llm_latency_seconds,
    llm_tokens_total,
    orchestrations_total,
    provider_attempts_total,
    provider_errors_total,
    provider_fallbacks_total,
    validation_failures_total,
)

__all__ = [
    "provider_attempts_total",
    "provider_errors_total",
    "provider_fallbacks_total",
    "validation_failures_total",
    "backoff_seconds",
    "llm_latency_seconds",
    "llm_tokens_total",
    "orchestrations_total",
]
