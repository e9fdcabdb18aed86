"""Prometheus metrics for the Cardwise service.

Metrics are organized into two categories:

Business Metrics (for the card holders' dashboard):
- cardwise_purchase_intents_total: Purchase previews by bank
- cardwise_confirmation_outcomes_total: Workflow outcomes
- cardwise_advisory_warnings_total: Better-card warnings shown
- cardwise_days_to_pay: Days-to-pay of committed purchases

Technical Metrics (for Engineering):
- cardwise_pending_confirmations: Live pending confirmations
- cardwise_pending_swept_total: Entries removed by the expiry sweep
- cardwise_sheets_append_latency_seconds: Spreadsheet append latency
- cardwise_sheets_append_total: Spreadsheet appends by status
- cardwise_sheets_retry_total: Spreadsheet append retries
- cardwise_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

purchase_intents_total = Counter(
    "cardwise_purchase_intents_total",
    "Total number of purchase intents previewed",
    ["bank"],
)

confirmation_outcomes_total = Counter(
    "cardwise_confirmation_outcomes_total",
    "Confirmation workflow outcomes",
    ["outcome"],  # warned, committed, cancelled, expired, rejected
)

advisory_warnings_total = Counter(
    "cardwise_advisory_warnings_total",
    "Total number of better-card warnings shown",
    ["chosen_bank", "best_bank"],
)

days_to_pay_histogram = Histogram(
    "cardwise_days_to_pay",
    "Days to pay of committed purchases on cycle cards",
    buckets=[5, 10, 15, 20, 25, 30, 35, 40, 45, 50, 60],
)


# =============================================================================
# Technical Metrics
# =============================================================================

pending_confirmations_gauge = Gauge(
    "cardwise_pending_confirmations",
    "Current number of pending confirmations",
)

pending_swept_total = Counter(
    "cardwise_pending_swept_total",
    "Total number of pending confirmations removed by the expiry sweep",
)

sheets_append_latency = Histogram(
    "cardwise_sheets_append_latency_seconds",
    "Spreadsheet append latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

sheets_append_total = Counter(
    "cardwise_sheets_append_total",
    "Total number of spreadsheet appends",
    ["status"],  # success, failure
)

sheets_retries = Counter(
    "cardwise_sheets_retry_total",
    "Total number of spreadsheet append retries",
)

http_requests_total = Counter(
    "cardwise_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "cardwise_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_purchase_intent(bank: str) -> None:
    """Record a previewed purchase."""
    purchase_intents_total.labels(bank=bank).inc()


def record_outcome(outcome: str) -> None:
    """Record a workflow outcome."""
    confirmation_outcomes_total.labels(outcome=outcome).inc()


def record_warning(chosen_bank: str, best_bank: str) -> None:
    """Record a better-card warning."""
    advisory_warnings_total.labels(chosen_bank=chosen_bank, best_bank=best_bank).inc()


def record_days_to_pay(days: int) -> None:
    days_to_pay_histogram.observe(days)


def set_pending_count(count: int) -> None:
    """Update the pending confirmations gauge."""
    pending_confirmations_gauge.set(count)


def record_swept(count: int) -> None:
    if count:
        pending_swept_total.inc(count)


@contextmanager
def track_sheets_append_latency() -> Generator[None, None, None]:
    """Context manager to track spreadsheet append latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        sheets_append_latency.observe(duration)


def record_sheets_append_success() -> None:
    sheets_append_total.labels(status="success").inc()


def record_sheets_append_failure() -> None:
    """Record a spreadsheet append that failed after all retries."""
    sheets_append_total.labels(status="failure").inc()


def record_sheets_retry() -> None:
    sheets_retries.inc()


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
