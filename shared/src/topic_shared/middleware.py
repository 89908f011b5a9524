"""FastAPI middleware for request_id and trace_id."""
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from topic_shared.logging import clear_request_context, set_request_context

REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Add request_id and trace_id to the logging context and response headers.

    Starlette headers are case-insensitive, so one lookup per header is enough.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        trace_id = request.headers.get(TRACE_ID_HEADER) or request_id
        set_request_context(request_id=request_id, trace_id=trace_id)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[TRACE_ID_HEADER] = trace_id
            return response
        finally:
            clear_request_context()
