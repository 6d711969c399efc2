"""Prometheus metrics for auth outcomes, biller changes and payment marks"""

from prometheus_client import Counter, Histogram

# Auth metrics
auth_attempts_counter = Counter(
    "paytrack_auth_attempts_total",
    "Login and registration attempts",
    ["method", "outcome"],  # method: password | google | register
)

# Biller metrics
biller_changes_counter = Counter(
    "paytrack_biller_changes_total",
    "Biller lifecycle operations",
    ["action", "type"],  # action: created | updated | deleted
)

payment_marks_counter = Counter(
    "paytrack_payment_marks_total",
    "Paid/unpaid marks applied to billers",
    ["action", "outcome"],  # action: pay | unpay; outcome: ok | rejected
)

# Identity provider metrics
google_fetch_failures_counter = Counter(
    "google_oauth_failures_total",
    "Failed Google OAuth token or profile fetches",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_auth(method: str, success: bool) -> None:
    auth_attempts_counter.labels(method=method, outcome="success" if success else "failure").inc()


def record_biller_change(action: str, biller_type: str) -> None:
    biller_changes_counter.labels(action=action, type=biller_type).inc()


def record_payment_mark(action: str, accepted: bool) -> None:
    """Count pay/unpay calls, separating duplicates and misses"""
    payment_marks_counter.labels(action=action, outcome="ok" if accepted else "rejected").inc()
