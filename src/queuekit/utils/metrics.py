"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Gauge, CollectorRegistry

# Create registry
registry = CollectorRegistry()

# Queue metrics
queue_publish_total = Counter(
    "queuekit_queue_publish_total",
    "Total messages published",
    ["queue_name"],
    registry=registry,
)

queue_consume_total = Counter(
    "queuekit_queue_consume_total",
    "Total receive attempts by outcome",
    ["queue_name", "status"],
    registry=registry,
)

queue_depth = Gauge(
    "queuekit_queue_depth",
    "Approximate number of visible messages",
    ["queue_name"],
    registry=registry,
)

# Resolver metrics
resolver_lookups_total = Counter(
    "queuekit_resolver_lookups_total",
    "Queue URL lookups sent to the provider",
    ["result"],
    registry=registry,
)


class Metrics:
    """Metrics wrapper for easy access."""

    def __init__(self):
        self.queue_publish_total = queue_publish_total
        self.queue_consume_total = queue_consume_total
        self.queue_depth = queue_depth
        self.resolver_lookups_total = resolver_lookups_total
        self.registry = registry


metrics = Metrics()
