"""Prometheus metrics for schedule sources, generated schedule sizes, and backend health"""

from prometheus_client import Counter, Histogram

# Schedule metrics
schedule_counter = Counter(
    "credisales_schedule_total",
    "Installment schedules served",
    ["source"],  # backend | generated | preview
)

generated_length_histogram = Histogram(
    "credisales_generated_schedule_length",
    "Number of periods in client-side generated schedules",
    ["agreement"],
    buckets=[1, 4, 8, 12, 26, 52, 104],
)

invalid_terms_counter = Counter(
    "credisales_invalid_contract_terms_total",
    "Schedules rejected because of invalid contract terms",
)

# Backend API metrics
backend_fetch_failures_counter = Counter(
    "backend_fetch_failures_total",
    "Failed backend API calls",
    ["endpoint"],
)

backend_latency_histogram = Histogram(
    "backend_latency_seconds",
    "Backend API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_schedule(source: str, agreement: str | None, entry_count: int) -> None:
    """Record which source produced a schedule, and the size of generated ones"""
    schedule_counter.labels(source=source).inc()

    if source != "backend" and agreement:
        generated_length_histogram.labels(agreement=agreement).observe(entry_count)
