"""
REST API routes for the chat relay.
"""

import json
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from opentelemetry import trace

from ..core.config import RelayConfig
from ..core.errors import ValidationError
from ..core.gateway import ChatGateway

logger = logging.getLogger(__name__)

router = APIRouter()
tracer = trace.get_tracer(__name__)


def get_gateway(request: Request) -> ChatGateway:
    return request.app.state.gateway


def get_config(request: Request) -> RelayConfig:
    return request.app.state.config


@router.get("/health")
async def health_check(config: RelayConfig = Depends(get_config)):
    """Report which provider credentials are configured."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "providers": config.credentials_present(),
    }


@router.post("/chat")
async def chat(request: Request, gateway: ChatGateway = Depends(get_gateway)):
    """Relay a chat conversation to the requested provider."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        error = ValidationError("Request body must be valid JSON")
        return JSONResponse(status_code=error.status_code, content=error.to_envelope().to_dict())

    provider = payload.get("provider") if isinstance(payload, dict) else None
    with tracer.start_as_current_span("chat_request") as span:
        span.set_attribute("chat.provider", str(provider or "openai"))
        response = await gateway.handle(payload)
        span.set_attribute("http.status_code", response.status_code)

    return JSONResponse(status_code=response.status_code, content=response.body)


@router.get("/providers")
async def list_providers(gateway: ChatGateway = Depends(get_gateway)):
    """List configured providers and their default models."""
    return {"providers": gateway.registry.list_providers()}


@router.get("/providers/{provider}/models")
async def list_provider_models(provider: str, gateway: ChatGateway = Depends(get_gateway)):
    """List the models a configured provider offers."""
    try:
        adapter = gateway.resolve(provider)
    except ValidationError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_envelope().to_dict())

    models = await adapter.list_models()
    return {"provider": provider, "models": models}
