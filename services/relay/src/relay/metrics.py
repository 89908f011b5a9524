"""Prometheus metrics for the relay."""
from prometheus_client import Counter

RELAY_REQUESTS = Counter(
    "relay_requests_total",
    "Topic generation requests by outcome.",
    ["outcome"],
)
RELAY_FRAGMENTS = Counter(
    "relay_fragments_total",
    "Text fragments relayed to callers.",
)
