"""Streaming client for the Gemini generative language REST API."""
import json
from typing import Any, AsyncIterator

import httpx
import structlog

from topic_shared.http_client import create_http_client

from relay.client.base import TopicModelClient
from relay.errors import UpstreamError

GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# Fixed sampling: a bit creative but still focused.
GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.7,
    "topP": 0.95,
    "topK": 64,
    "maxOutputTokens": 2000,
    "thinkingConfig": {"thinkingBudget": 512},
}

log = structlog.get_logger(__name__)


def extract_text(event: dict[str, Any]) -> str:
    """Concatenate the non-thought text parts of the first candidate."""
    candidates = event.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(
        p["text"] for p in parts if isinstance(p.get("text"), str) and not p.get("thought")
    )


def _error_message(payload: Any) -> str | None:
    if isinstance(payload, list) and payload:
        payload = payload[0]
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return payload["error"].get("message")
    return None


class GeminiClient(TopicModelClient):
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = GEMINI_MODEL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._transport = transport

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": GENERATION_CONFIG,
        }

    async def stream_generate(self, prompt: str) -> AsyncIterator[str]:
        url = f"{self._base_url}/models/{self._model}:streamGenerateContent"
        async with create_http_client(self._timeout, self._transport) as client:
            async with client.stream(
                "POST",
                url,
                params={"alt": "sse"},
                headers={"x-goog-api-key": self._api_key},
                json=self._payload(prompt),
            ) as resp:
                if resp.is_error:
                    body = await resp.aread()
                    try:
                        message = _error_message(json.loads(body))
                    except ValueError:
                        message = None
                    raise UpstreamError(
                        f"Gemini API returned {resp.status_code}: {message or resp.reason_phrase}"
                    )
                async for line in resp.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    data = line[len("data:"):].strip()
                    if not data:
                        continue
                    event = json.loads(data)
                    message = _error_message(event)
                    if message is not None:
                        raise UpstreamError(f"Gemini API stream error: {message}")
                    finish_reason = (event.get("candidates") or [{}])[0].get("finishReason")
                    if finish_reason and finish_reason != "STOP":
                        log.warning("gemini_stream_finished", finish_reason=finish_reason)
                    yield extract_text(event)
