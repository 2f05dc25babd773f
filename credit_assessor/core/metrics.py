"""Prometheus metrics for the Credit Assessor service.

Metrics are organized into two categories:

Business Metrics (for Credit/Risk):
- credit_assessor_score_total: Score evaluations by risk level
- credit_assessor_overall_score: Distribution of display scores
- credit_assessor_decision_total: Instant decisions by outcome
- credit_assessor_fraud_flags_total: Triggered fraud rules by recommendation
- credit_assessor_monitoring_action_total: Loan monitoring actions

Technical Metrics (for Engineering/SRE):
- credit_assessor_operation_latency_seconds: Engine latency by operation
- credit_assessor_agent_task_total: Agent tasks by task and status
- credit_assessor_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Credit/Risk dashboards)
# =============================================================================

score_total = Counter(
    "credit_assessor_score_total",
    "Total number of score evaluations",
    ["risk_level"],  # low, medium, high, very_high
)

overall_score = Histogram(
    "credit_assessor_overall_score",
    "Distribution of display scores (300-850)",
    buckets=[350, 400, 450, 500, 550, 600, 650, 700, 750, 800, 850],
)

decision_total = Counter(
    "credit_assessor_decision_total",
    "Total number of instant decisions made",
    ["outcome"],  # approve, decline, manual_review
)

fraud_flags_total = Counter(
    "credit_assessor_fraud_flags_total",
    "Total number of triggered fraud rules",
    ["recommendation"],  # proceed, investigate, reject
)

monitoring_action_total = Counter(
    "credit_assessor_monitoring_action_total",
    "Loan monitoring reports by action required",
    ["action"],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

operation_latency = Histogram(
    "credit_assessor_operation_latency_seconds",
    "Engine operation latency in seconds",
    ["operation"],  # score, decision, fraud, portfolio, monitor
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

agent_task_total = Counter(
    "credit_assessor_agent_task_total",
    "Agent tasks executed",
    ["task", "status"],  # status: success, missing_input, invalid_input, error
)

http_requests_total = Counter(
    "credit_assessor_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "credit_assessor_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_score(risk_level: str, score: int) -> None:
    """Record a score evaluation in metrics."""
    score_total.labels(risk_level=risk_level).inc()
    overall_score.observe(score)


def record_decision(outcome: str) -> None:
    """Record an instant decision in metrics."""
    decision_total.labels(outcome=outcome).inc()


def record_fraud_assessment(recommendation: str, flag_count: int) -> None:
    """Record the fraud rules triggered by one assessment."""
    if flag_count > 0:
        fraud_flags_total.labels(recommendation=recommendation).inc(flag_count)


def record_monitoring_action(action: str) -> None:
    monitoring_action_total.labels(action=action).inc()


def record_agent_task(task: str, status: str) -> None:
    agent_task_total.labels(task=task, status=status).inc()


@contextmanager
def track_operation_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track engine operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        operation_latency.labels(operation=operation).observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
