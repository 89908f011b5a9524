"""Relay upstream text fragments as newline-delimited JSON chunks."""
from contextlib import aclosing
from typing import AsyncGenerator

import structlog
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from topic_shared.schemas import ResponseChunk

from relay.metrics import RELAY_FRAGMENTS, RELAY_REQUESTS

STREAM_HEADERS = {
    "Transfer-Encoding": "chunked",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}
STREAM_ERROR_MESSAGE = "An unexpected error occurred during streaming."

log = structlog.get_logger(__name__)


async def first_fragment(fragments: AsyncGenerator[str, None]) -> str | None:
    """Advance to the first non-empty fragment; None if the upstream produced no text.

    Nothing has been sent to the caller while this runs, so a failure here can
    still become an ordinary error response.
    """
    async for fragment in fragments:
        if fragment:
            return fragment
    return None


async def ndjson_stream(
    fragments: AsyncGenerator[str, None],
    first: str | None,
) -> AsyncGenerator[str, None]:
    """Yield one JSON line per non-empty fragment, then a single terminal line.

    Headers are already on the wire, so an upstream failure becomes a final
    `{"error": ..., "done": true}` line instead of a status code.
    """
    async with aclosing(fragments):
        try:
            if first:
                RELAY_FRAGMENTS.inc()
                yield ResponseChunk(text=first).to_line()
            async for fragment in fragments:
                if not fragment:
                    continue
                RELAY_FRAGMENTS.inc()
                yield ResponseChunk(text=fragment).to_line()
            yield ResponseChunk.terminal().to_line()
            RELAY_REQUESTS.labels(outcome="completed").inc()
        except Exception:
            log.exception("relay_stream_failed")
            RELAY_REQUESTS.labels(outcome="stream_error").inc()
            yield ResponseChunk(error=STREAM_ERROR_MESSAGE, done=True).to_line()


def stream_response(fragments: AsyncGenerator[str, None], first: str | None) -> StreamingResponse:
    """NDJSON response that closes the upstream even if the body is never iterated."""
    return StreamingResponse(
        ndjson_stream(fragments, first),
        media_type="application/json",
        headers=STREAM_HEADERS,
        background=BackgroundTask(fragments.aclose),
    )
