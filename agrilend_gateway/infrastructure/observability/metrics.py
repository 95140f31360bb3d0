"""Prometheus metrics for monitoring assessments, decisions, and upstream health"""

from prometheus_client import Counter, Histogram

# Assessment metrics
assessment_counter = Counter(
    "agrilend_assessment_total",
    "Credit assessments computed",
    ["profile", "risk_tier"],  # self_assessment | underwriting; low | medium | high
)

verdict_counter = Counter(
    "agrilend_verdict_total",
    "Assessment verdicts",
    ["profile", "verdict"],  # eligible | not_eligible | approve | review | reject
)

decision_commit_counter = Counter(
    "agrilend_decision_commit_total",
    "Officer decisions committed to loan applications",
    ["status"],  # approved | rejected
)

# Records store metrics
records_fetch_failures_counter = Counter(
    "records_fetch_failures_total",
    "Failed records API calls that made an assessment unavailable",
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Decision webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(profile: str, risk_tier: str, eligible: bool | None, recommendation: str | None) -> None:
    """Record assessment outcome for tier distribution and approval-rate dashboards"""
    assessment_counter.labels(profile=profile, risk_tier=risk_tier).inc()

    if recommendation is not None:
        verdict = recommendation
    else:
        verdict = "eligible" if eligible else "not_eligible"
    verdict_counter.labels(profile=profile, verdict=verdict).inc()
