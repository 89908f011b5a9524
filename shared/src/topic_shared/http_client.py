"""httpx client factory shared by the upstream provider client and the relay client."""
import httpx


def create_http_client(
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async HTTP client for a single request.

    `timeout=None` disables httpx's default 5s timeouts: model output can pause
    for a long time between fragments. No retries are configured; every call is
    a single attempt.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        transport=transport or httpx.AsyncHTTPTransport(retries=0),
    )
