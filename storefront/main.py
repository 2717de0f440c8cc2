from __future__ import annotations

import os

import uvicorn
from fastapi import FastAPI

from storefront.api.schemas import HealthOut
from storefront.chat.router import router as chat_router
from storefront.core.logging import setup_logging
from storefront.core.metrics import PrometheusMetricsMiddleware, metrics_router
from storefront.core.middleware.http_logging import HttpLoggingMiddleware

setup_logging()


def create_app() -> FastAPI:
    # The chat gateway is built lazily by its dependency provider on the first /chat call,
    # so importing or creating the app never reads Azure settings.
    app = FastAPI(
        title="Zava Storefront Chat API",
        description=(
            "Customer-facing assistant for the Zava Storefront.\n\n"
            "- Messages are forwarded to an Azure OpenAI deployment with a fixed system prompt.\n"
            "- Authentication uses managed identity; no API keys are configured.\n"
            "- Logs and metrics carry metadata only, never message or reply text."
        ),
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "chat",
                "description": "Single-turn product and shopping assistance.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "It does not call the chat provider, so it stays green when Azure OpenAI is "
            "unconfigured or unreachable."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(chat_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point (`storefront-chat`); App Service supplies PORT."""

    uvicorn.run(
        "storefront.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )
