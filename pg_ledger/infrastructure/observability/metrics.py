"""Prometheus metrics for monitoring payment collection, arrears and report usage"""

from prometheus_client import Counter, Histogram, Gauge

# Payment metrics
payment_attempt_counter = Counter(
    "pg_ledger_payment_attempts_total",
    "Payment attempts by outcome",
    ["outcome"],  # accepted | no_billable_room | already_settled | no_payment_needed | not_found
)

collected_amount_counter = Counter(
    "pg_ledger_collected_cents_total",
    "Total amount collected through recorded payments, in cents",
)

# Report metrics
report_build_counter = Counter(
    "pg_ledger_report_builds_total",
    "Billing reports built",
    ["view"],  # overview | overdue | upcoming | collected | ledger
)

total_arrears_gauge = Gauge(
    "pg_ledger_total_arrears_cents",
    "Total arrears from the most recent overdue computation, in cents",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payment_attempt(outcome: str, amount_cents: int = 0) -> None:
    """Record payment metrics; amount counts only for accepted payments"""
    payment_attempt_counter.labels(outcome=outcome).inc()
    if outcome == "accepted":
        collected_amount_counter.inc(amount_cents)


def record_report(view: str, total_arrears_cents: int | None = None) -> None:
    """Record a report build, tracking arrears when the view computed them"""
    report_build_counter.labels(view=view).inc()
    if total_arrears_cents is not None:
        total_arrears_gauge.set(total_arrears_cents)
