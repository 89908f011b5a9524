"""Topic client configuration."""
from pydantic_settings import SettingsConfigDict

from topic_shared.config import BaseAppSettings


class TopicClientSettings(BaseAppSettings):
    model_config = SettingsConfigDict(env_prefix="TOPIC_CLIENT_")

    relay_url: str = "http://localhost:8002"
    timeout_seconds: float | None = None
    json_logs: bool = False
