"""Relay service configuration."""
from pydantic import Field
from pydantic_settings import SettingsConfigDict

from topic_shared.config import BaseAppSettings


class RelaySettings(BaseAppSettings):
    model_config = SettingsConfigDict(env_prefix="RELAY_")

    host: str = "0.0.0.0"
    port: int = 8002
    api_key: str = Field("", validation_alias="API_KEY")
    mock: bool = False
    upstream_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    upstream_timeout_seconds: float | None = None
