"""Metric instruments for the HTTP backend."""

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram


HTTP_DURATION_BUCKETS_MS = (5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000)
DB_DURATION_BUCKETS_MS = (1, 5, 10, 25, 50, 100, 250, 500, 1000)


@dataclass(frozen=True)
class Instruments:
    """Handles for every instrument bound to one registry."""

    # HTTP
    http_request_duration_ms: Histogram
    http_requests_total: Counter
    http_requests_in_flight: Gauge
    # Database
    db_operation_duration_ms: Histogram
    db_operations_total: Counter
    db_connection_pool_active: Gauge
    # Business
    orders_created_total: Counter
    payments_total: Counter
    revenue_total_usd: Counter
    # Security / errors
    errors_total: Counter
    auth_failures_total: Counter
    rate_limit_hits_total: Counter
    # Workers
    jobs_completed_total: Counter
    queue_depth: Gauge


def declare_instruments(registry: CollectorRegistry) -> Instruments:
    """Declare all instruments and register them with ``registry``.

    Must be called once per registry; a second call raises ``ValueError``
    for duplicated timeseries.
    """
    return Instruments(
        http_request_duration_ms=Histogram(
            "http_request_duration_ms",
            "Duration of HTTP requests in milliseconds",
            ["method", "route", "status_code"],
            buckets=HTTP_DURATION_BUCKETS_MS,
            registry=registry,
        ),
        http_requests_total=Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status_code"],
            registry=registry,
        ),
        http_requests_in_flight=Gauge(
            "http_requests_in_flight",
            "Number of HTTP requests currently being processed",
            registry=registry,
        ),
        db_operation_duration_ms=Histogram(
            "db_operation_duration_ms",
            "Duration of MongoDB operations in milliseconds",
            ["operation", "collection", "status"],
            buckets=DB_DURATION_BUCKETS_MS,
            registry=registry,
        ),
        db_operations_total=Counter(
            "db_operations_total",
            "Total number of database operations",
            ["operation", "collection", "status"],
            registry=registry,
        ),
        db_connection_pool_active=Gauge(
            "db_connection_pool_active",
            "Active MongoDB connection pool connections",
            registry=registry,
        ),
        orders_created_total=Counter(
            "orders_created_total",
            "Total number of orders created",
            ["currency", "payment_method"],
            registry=registry,
        ),
        payments_total=Counter(
            "payments_total",
            "Total number of payments processed",
            ["status", "gateway"],
            registry=registry,
        ),
        # Exposed as revenue_total_usd_total: the client suffixes counter samples.
        revenue_total_usd=Counter(
            "revenue_total_usd",
            "Total revenue processed in USD (approximate)",
            ["currency"],
            registry=registry,
        ),
        errors_total=Counter(
            "errors_total",
            "Total number of application errors",
            ["type", "severity", "service"],
            registry=registry,
        ),
        auth_failures_total=Counter(
            "auth_failures_total",
            "Total number of authentication failures",
            ["reason"],
            registry=registry,
        ),
        rate_limit_hits_total=Counter(
            "rate_limit_hits_total",
            "Total number of rate-limit triggers",
            ["endpoint"],
            registry=registry,
        ),
        jobs_completed_total=Counter(
            "jobs_completed_total",
            "Total number of background jobs completed",
            ["job_type", "queue", "status"],
            registry=registry,
        ),
        queue_depth=Gauge(
            "queue_depth",
            "Current depth of a job queue",
            ["queue"],
            registry=registry,
        ),
    )
