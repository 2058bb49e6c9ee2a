"""
Prometheus metrics collection for the employee API

This module provides metrics instrumentation for monitoring
request outcomes, validation quality, and third-party service health.
"""
from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# REQUEST METRICS
# =======================

# Employee operations counter
employee_requests_total = Counter(
    name="employee_requests_total",
    documentation="Total number of employee resource operations",
    labelnames=["operation", "status"],  # status: success, invalid, not_found
    registry=REGISTRY,
)

# Stored employees
employee_store_size = Gauge(
    name="employee_store_size",
    documentation="Current number of employees in the store",
    registry=REGISTRY,
)

# =======================
# VALIDATION METRICS
# =======================

# Validation failures counter
validation_failures_total = Counter(
    name="employee_validation_failures_total",
    documentation="Total number of rejected payloads by first failing field and rule type",
    labelnames=["field_name", "rule_type"],
    registry=REGISTRY,
)

# =======================
# EXTERNAL SERVICE METRICS
# =======================

# Fallbacks used instead of a real quote/joke
external_fallbacks_total = Counter(
    name="employee_external_fallbacks_total",
    documentation="Total number of external content calls replaced by a fallback value",
    labelnames=["service"],
    registry=REGISTRY,
)

# External call latency
external_call_duration_seconds = Histogram(
    name="employee_external_call_duration_seconds",
    documentation="Time spent calling external content services in seconds",
    labelnames=["service"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """
    Get content type for Prometheus metrics

    Returns:
        Content type string
    """
    return CONTENT_TYPE_LATEST


# =======================
# CONTEXT MANAGERS
# =======================

class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(external_call_duration_seconds, service="quote"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        """
        Initialize duration tracker

        Args:
            histogram: Prometheus Histogram metric
            **labels: Label values for the metric
        """
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def record_request(operation: str, status: str) -> None:
    """Record the outcome of one employee operation."""
    increment_counter(employee_requests_total, 1, operation=operation, status=status)


def record_validation_failure(field_name: str, rule_type: str) -> None:
    """
    Record a validation failure.

    Args:
        field_name: Name of field that failed validation
        rule_type: Type of validation rule that failed
    """
    increment_counter(validation_failures_total, 1, field_name=field_name, rule_type=rule_type)
