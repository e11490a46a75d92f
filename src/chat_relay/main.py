"""
Chat Relay Service

A FastAPI service that forwards chat conversations to one of several
model vendors and normalizes the reply:
- Canonical message list for OpenAI, Gemini and Anthropic
- Provider registry built once from the configured API keys
- Uniform success and error envelopes
- Health endpoint reporting configured credentials
"""

import logging
from typing import Optional
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource

from . import __version__
from .api.routes import router
from .core.config import RelayConfig, load_config
from .core.gateway import ChatGateway
from .core.registry import ProviderRegistry

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _setup_tracing(otel_endpoint: Optional[str]) -> None:
    if not otel_endpoint:
        return

    resource = Resource.create({"service.name": "chat-relay"})
    provider = TracerProvider(resource=resource)
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=otel_endpoint))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    logger.info(f"Exporting traces to {otel_endpoint}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config: RelayConfig = app.state.config
    registry: ProviderRegistry = app.state.gateway.registry

    _setup_tracing(config.otel_endpoint)

    if len(registry) == 0:
        logger.warning("No API key configured! Set at least one provider key in the environment or .env")
    else:
        logger.info(f"Configured providers: {', '.join(registry.names())}")

    logger.info(f"Chat relay started (health: /health, chat: /chat, port {config.port})")
    yield

    # Cleanup
    await registry.disconnect_all()
    logger.info("Chat relay stopped")


def create_app(
    config: Optional[RelayConfig] = None,
    registry: Optional[ProviderRegistry] = None,
) -> FastAPI:
    """
    Build the relay application.

    Args:
        config: Relay configuration; loaded from file/environment if None
        registry: Provider registry; built from ``config`` if None

    Returns:
        Configured FastAPI app
    """
    if config is None:
        config = load_config()
    if registry is None:
        registry = ProviderRegistry.from_config(config)

    app = FastAPI(
        title="Chat Relay",
        description="Multi-provider chat gateway",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.gateway = ChatGateway(registry)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={"error": "Route not found", "path": request.url.path},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
        )

    app.include_router(router)

    # Instrument with OpenTelemetry
    FastAPIInstrumentor.instrument_app(app)

    return app


def run() -> None:
    """Console entry point."""
    import uvicorn

    load_dotenv()
    config = load_config()
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    run()
