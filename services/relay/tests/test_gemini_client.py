"""Tests for the Gemini streaming client against a mocked HTTP transport."""
import json

import httpx
import pytest

from relay.client.gemini_client import GENERATION_CONFIG, GeminiClient, extract_text
from relay.errors import UpstreamError


def sse(*events: dict) -> bytes:
    return "".join(f"data: {json.dumps(e, ensure_ascii=False)}\r\n\r\n" for e in events).encode()


def text_event(*texts: str, thought: bool = False) -> dict:
    parts = [{"text": t, "thought": True} if thought else {"text": t} for t in texts]
    return {"candidates": [{"content": {"parts": parts, "role": "model"}}]}


def make_client(handler) -> GeminiClient:
    return GeminiClient(
        api_key="secret",
        base_url="https://gemini.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )


def test_extract_text_joins_parts_and_drops_thoughts() -> None:
    event = {
        "candidates": [
            {"content": {"parts": [{"text": "thinking", "thought": True}, {"text": "A"}, {"text": "B"}]}}
        ]
    }
    assert extract_text(event) == "AB"


@pytest.mark.parametrize(
    "event",
    [{}, {"candidates": []}, {"candidates": [{}]}, {"candidates": [{"content": {}}]}, {"usageMetadata": {}}],
)
def test_extract_text_without_text_is_empty(event: dict) -> None:
    assert extract_text(event) == ""


@pytest.mark.asyncio
async def test_request_shape() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=sse(text_event("ok")))

    fragments = [f async for f in make_client(handler).stream_generate("پرامپت")]

    assert fragments == ["ok"]
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-2.5-pro:streamGenerateContent"
    assert request.url.params["alt"] == "sse"
    assert request.headers["x-goog-api-key"] == "secret"
    body = json.loads(request.content)
    assert body["contents"] == [{"parts": [{"text": "پرامپت"}]}]
    assert body["generationConfig"] == GENERATION_CONFIG
    assert body["generationConfig"]["thinkingConfig"] == {"thinkingBudget": 512}


@pytest.mark.asyncio
async def test_yields_fragments_in_order_including_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=sse(
                text_event("plan", thought=True),
                text_event("## ۱"),
                {"usageMetadata": {"totalTokenCount": 10}},
                text_event(" موضوع"),
            ),
        )

    fragments = [f async for f in make_client(handler).stream_generate("p")]
    assert fragments == ["", "## ۱", "", " موضوع"]


@pytest.mark.asyncio
async def test_error_status_raises_upstream_error_with_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
        )

    with pytest.raises(UpstreamError, match="API key not valid"):
        async for _ in make_client(handler).stream_generate("p"):
            pass


@pytest.mark.asyncio
async def test_error_status_with_non_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, content=b"<html>unavailable</html>")

    with pytest.raises(UpstreamError, match="503"):
        async for _ in make_client(handler).stream_generate("p"):
            pass


@pytest.mark.asyncio
async def test_error_event_mid_stream_raises_after_earlier_fragments() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=sse(text_event("A"), {"error": {"code": 500, "message": "internal"}}),
        )

    received = []
    with pytest.raises(UpstreamError, match="internal"):
        async for fragment in make_client(handler).stream_generate("p"):
            received.append(fragment)
    assert received == ["A"]


@pytest.mark.asyncio
async def test_transport_error_propagates() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("dns failure", request=request)

    with pytest.raises(httpx.ConnectError):
        async for _ in make_client(handler).stream_generate("p"):
            pass
