"""Custom Prometheus metrics for the AI provider orchestration layer.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- provider_fallbacks_total (primary provider regularly exhausted)
- provider_errors_total{category="rate_limited"} (quota pressure)
- orchestrations_total{outcome="failed"} (users see errors)
"""

from prometheus_client import Counter, Histogram

# === Provider Attempt Metrics ===

provider_attempts_total = Counter(
    "provider_attempts_total",
    "Total provider calls by provider and outcome",
    ["provider", "outcome"],
)
"""
Provider call counter.

Labels:
- provider: openai, gemini
- outcome: success (output accepted), error (call failed), invalid (output rejected)

Alert thresholds:
- WARN: error+invalid > 10% of calls
"""

provider_errors_total = Counter(
    "provider_errors_total",
    "Total failed attempts by provider and error category",
    ["provider", "category"],
)
"""
Failed attempt counter by classification.

Labels:
- provider: openai, gemini
- category: rate_limited, unavailable, network, terminal, extraction_failed, validation_failed
"""

provider_fallbacks_total = Counter(
    "provider_fallbacks_total",
    "Total fallbacks from one provider to the next",
    ["from_provider", "to_provider"],
)
"""
Fallback counter.

Incremented once per orchestration that exhausts a provider and moves on.

Alert thresholds:
- WARN: fallback rate > 5% of orchestrations
- CRITICAL: fallback rate > 25% of orchestrations
"""

# === Validation Metrics ===

validation_failures_total = Counter(
    "validation_failures_total",
    "Total rejected provider outputs by task and error type",
    ["task", "error_type"],
)
"""
Validation failures counter.

Labels:
- task: decision_makers, industry
- error_type: extraction_failed, validation_failed
"""

# === Backoff Metrics ===

backoff_seconds = Histogram(
    "backoff_seconds",
    "Wait before a retry attempt in seconds",
    ["provider", "category"],
    buckets=[0.5, 1.0, 2.0, 5.0, 15.0, 30.0, 60.0, 120.0, 200.0],
)
"""
Backoff delay histogram.

Labels:
- provider: openai, gemini
- category: classification of the failure that caused the wait

Buckets cover exponential backoff (1s..) and the overload table (5s..180s).
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Provider generation latency in seconds",
    ["provider", "model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)
"""
Provider generation latency histogram.

Labels:
- provider: openai, gemini
- model: Model name (e.g., gpt-4o-mini, gemini-2.5-flash)
- success: true (generation succeeded), false (generation failed)

Alert thresholds:
- WARN: p95 > 30s
- CRITICAL: p95 > 60s
"""

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens consumed by provider, model and type",
    ["provider", "model", "token_type"],
)
"""
Token consumption counter.

Labels:
- provider: openai, gemini
- model: Model name
- token_type: prompt (input tokens), completion (output tokens)

Used for cost estimation and quota planning.
"""

# === Orchestration Metrics ===

orchestrations_total = Counter(
    "orchestrations_total",
    "Total orchestration calls by task and outcome",
    ["task", "outcome"],
)
"""
Orchestration outcome counter.

Labels:
- task: decision_makers, industry
- outcome: success, failed
"""
