from relay.client.base import TopicModelClient
from relay.client.gemini_client import GeminiClient
from relay.client.mock_client import MockTopicClient

__all__ = ["GeminiClient", "MockTopicClient", "TopicModelClient"]
