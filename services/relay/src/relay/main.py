"""Relay service entrypoint - streams Gemini topic suggestions as NDJSON."""
from contextlib import asynccontextmanager
from typing import Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from starlette.exceptions import HTTPException as StarletteHTTPException

from topic_shared.logging import configure_logging
from topic_shared.middleware import RequestIdMiddleware
from topic_shared.schemas import HealthResponse

from relay.api.routes import router
from relay.client import GeminiClient, MockTopicClient, TopicModelClient
from relay.config import RelaySettings
from relay.errors import RelayError
from relay.metrics import RELAY_REQUESTS

ClientFactory = Callable[[RelaySettings], TopicModelClient]

log = structlog.get_logger(__name__)


def default_client_factory(settings: RelaySettings) -> TopicModelClient:
    if settings.mock:
        return MockTopicClient()
    return GeminiClient(
        api_key=settings.api_key,
        base_url=settings.upstream_base_url,
        timeout=settings.upstream_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: RelaySettings = app.state.settings
    log.info(
        "relay_startup",
        api_key_configured=bool(settings.api_key),
        mock=settings.mock,
    )
    if not settings.api_key:
        log.warning("api_key_missing", detail="every /api/chat request will fail with 500")
    yield


def create_app(
    settings: RelaySettings | None = None,
    client_factory: ClientFactory | None = None,
) -> FastAPI:
    settings = settings or RelaySettings()
    configure_logging(json_logs=settings.json_logs)
    app = FastAPI(title="Research Topic Relay", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.client_factory = client_factory or default_client_factory
    app.add_middleware(RequestIdMiddleware)

    @app.exception_handler(RelayError)
    async def _relay_error(request: Request, exc: RelayError) -> JSONResponse:
        RELAY_REQUESTS.labels(outcome=exc.outcome).inc()
        if exc.status_code < 500:
            log.info("request_rejected", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    app.include_router(router)

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok", service="relay")

    @app.get("/readyz", response_model=HealthResponse)
    async def readyz() -> HealthResponse:
        if not app.state.settings.api_key:
            return HealthResponse(status="degraded", service="relay")
        return HealthResponse(status="ok", service="relay")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = RelaySettings()
    uvicorn.run(
        "relay.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )
