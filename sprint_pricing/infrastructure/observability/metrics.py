"""Prometheus metrics for pricing calculations and sprint total recalculations"""

from prometheus_client import Counter, Histogram
from sprint_pricing.domain.complexity import complexity_level

pricing_calculation_counter = Counter(
    "sprint_pricing_calculations_total",
    "Ad-hoc pricing calculations served",
)

sprint_recalculation_counter = Counter(
    "sprint_pricing_recalculations_total",
    "Sprint draft totals recalculated",
    ["trigger"],  # complexity | sync | backfill
)

complexity_update_counter = Counter(
    "sprint_pricing_complexity_updates_total",
    "Complexity score edits by level",
    ["level"],
)

sprint_price_histogram = Histogram(
    "sprint_pricing_sprint_price_dollars",
    "Sprint total price after recalculation",
    buckets=[5_000, 10_000, 25_000, 50_000, 100_000, 250_000],
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_recalculation(trigger: str, total_price: float) -> None:
    """Record one sprint totals write"""
    sprint_recalculation_counter.labels(trigger=trigger).inc()
    sprint_price_histogram.observe(total_price)


def record_complexity_update(complexity: float) -> None:
    """Bucket complexity edits by named level"""
    complexity_update_counter.labels(level=complexity_level(complexity)).inc()
