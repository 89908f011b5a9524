"""HTTP client that consumes the relay's newline-delimited JSON stream."""
import codecs
import json
from typing import AsyncIterator

import httpx
import structlog
from pydantic import ValidationError

from topic_shared.http_client import create_http_client
from topic_shared.schemas import GenerationRequest, ResponseChunk

from topic_client.errors import EmptyResponseError, RelayConnectionError, RelayHTTPError

NULL_BODY_STATUSES = frozenset({204, 205})
EMPTY_RESPONSE_MESSAGE = "پاسخ دریافتی خالی است."
SERVER_ERROR_PREFIX = "خطا در سرور"

log = structlog.get_logger(__name__)


def parse_chunk(line: str) -> ResponseChunk | None:
    """Parse one stream line; malformed lines are logged and dropped."""
    try:
        return ResponseChunk.model_validate_json(line)
    except ValidationError as e:
        log.warning("stream_line_skipped", line=line[:200], reason=str(e.errors()[0]["msg"]))
        return None


class ChunkStreamDecoder:
    """Turns arbitrarily split body bytes into ResponseChunks.

    UTF-8 sequences cut across reads are held by the incremental decoder until
    the rest arrives; invalid bytes become U+FFFD.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def _parse_lines(self, lines: list[str]) -> list[ResponseChunk]:
        chunks = []
        for line in lines:
            line = line.strip()
            if not line:
                continue
            chunk = parse_chunk(line)
            if chunk is not None:
                chunks.append(chunk)
        return chunks

    def feed(self, data: bytes) -> list[ResponseChunk]:
        self._buffer += self._decoder.decode(data)
        *lines, self._buffer = self._buffer.split("\n")
        return self._parse_lines(lines)

    def flush(self) -> list[ResponseChunk]:
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return self._parse_lines([tail])


async def _error_from_response(resp: httpx.Response) -> RelayHTTPError:
    """Build the error for a non-success response, reading its body exactly once."""
    text = (await resp.aread()).decode("utf-8", errors="replace")
    fallback = f"{SERVER_ERROR_PREFIX}: {resp.reason_phrase}"
    try:
        data = json.loads(text)
    except ValueError:
        message = text.strip() or fallback
    else:
        error = data.get("error") if isinstance(data, dict) else None
        message = error if isinstance(error, str) and error else fallback
    return RelayHTTPError(message, status_code=resp.status_code)


class RelayClient:
    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def stream_topics(self, request: GenerationRequest) -> AsyncIterator[ResponseChunk]:
        """Yield chunks in relay order, then one synthetic `{text: "", done: true}`.

        The relay normally sends its own terminal chunk too, so callers see
        `done=True` twice on a clean stream and must stop at the first one or
        tolerate the repeat.
        """
        url = f"{self._base_url}/api/chat"
        try:
            async with create_http_client(self._timeout, self._transport) as client:
                async with client.stream("POST", url, json=request.to_wire()) as resp:
                    if not resp.is_success:
                        error = await _error_from_response(resp)
                        log.warning(
                            "relay_request_failed",
                            status_code=error.status_code,
                            error=error.message,
                        )
                        raise error
                    if resp.status_code in NULL_BODY_STATUSES:
                        raise EmptyResponseError(EMPTY_RESPONSE_MESSAGE)

                    decoder = ChunkStreamDecoder()
                    async for data in resp.aiter_bytes():
                        for chunk in decoder.feed(data):
                            yield chunk
                    for chunk in decoder.flush():
                        yield chunk
        except httpx.TransportError as e:
            log.error("relay_unreachable", url=url, error=str(e))
            raise RelayConnectionError(f"ارتباط با سرور برقرار نشد: {e}") from e

        yield ResponseChunk.terminal()


def generate_topics_stream(
    request: GenerationRequest,
    relay_url: str = "http://localhost:8002",
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[ResponseChunk]:
    """Stream topic chunks for request from the relay at relay_url."""
    return RelayClient(relay_url, timeout=timeout, transport=transport).stream_topics(request)
