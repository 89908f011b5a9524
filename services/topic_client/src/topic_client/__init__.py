from topic_client.presenter import build_request, collect_topics, describe_error
from topic_client.stream_consumer import RelayClient, generate_topics_stream

__all__ = [
    "RelayClient",
    "build_request",
    "collect_topics",
    "describe_error",
    "generate_topics_stream",
]
