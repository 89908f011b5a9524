"""Relay API routes."""
import structlog
from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from topic_shared.schemas import CONFIGURATION_ERROR_PREFIX

from relay.api.schemas import ErrorResponse, parse_generation_request
from relay.config import RelaySettings
from relay.errors import ConfigurationError, UpstreamError
from relay.service.prompts import build_prompt
from relay.service.streaming import first_fragment, stream_response

CONFIG_ERROR_MESSAGE = (
    f"{CONFIGURATION_ERROR_PREFIX}: Gemini API key is missing. "
    "Please set the API_KEY environment variable."
)
UPSTREAM_ERROR_MESSAGE = (
    "Failed to generate topics from Gemini API. "
    "Please check your API key and network connection."
)

router = APIRouter(prefix="/api", tags=["topics"])
log = structlog.get_logger(__name__)


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: Request) -> StreamingResponse:
    """Stream topic suggestions as newline-delimited `{"text", "done"}` objects."""
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    body = parse_generation_request(payload)

    settings: RelaySettings = request.app.state.settings
    if not settings.api_key:
        log.error("api_key_missing")
        raise ConfigurationError(CONFIG_ERROR_MESSAGE)

    # A fresh client per request picks up the current credential.
    client = request.app.state.client_factory(settings)
    prompt = build_prompt(body.academic_level, body.field_of_study, body.keywords)
    log.info(
        "topic_generation_started",
        academic_level=body.academic_level.value,
        prompt_chars=len(prompt),
    )

    fragments = client.stream_generate(prompt)
    try:
        first = await first_fragment(fragments)
    except Exception as e:
        log.exception("upstream_call_failed", error=str(e))
        raise UpstreamError(UPSTREAM_ERROR_MESSAGE) from e

    return stream_response(fragments, first)
