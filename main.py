""" main.py: FastAPI application factory and process entrypoint for the knowledge base gateway.

This module builds the ASGI app, mounts the health and file routers, configures CORS (Cross-Origin Resource
Sharing) so the admin panel can call the gateway from the browser, exposes a Prometheus metrics endpoint, and
renders every `GatewayError` as a `{"error": ...}` JSON body; any other exception becomes a generic 500
`{"error": "Server error"}`. Configuration is loaded once and passed
explicitly; `create_app` never reads the environment when it is given `Settings`, which keeps tests isolated.

`run()` is the process entrypoint (also installed as the `kb-gateway` console script). It loads `.env`, builds
the settings and refuses to start, exiting with status 1 before any port is bound, when a required variable is
missing. For process managers that prefer an import string, `uvicorn main:create_app --factory` behaves the same
way: the factory raises `ConfigMissingError` and Uvicorn exits before listening.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from api import files as files_router
from api import health as health_router
from config import Settings, load_settings
from config.logging_config import setup_app_logging
from core.errors import ConfigMissingError, GatewayError
from provider_api import KnowledgeBaseClient, get_client
from services import build_gateway
from version import __version__

logger = logging.getLogger(__name__)


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error(
        "%s %s failed with %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc.message,
        extra={"extra_fields": {"status_code": exc.status_code}},
    )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s failed unexpectedly", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None, client: Optional[KnowledgeBaseClient] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings (Optional[Settings]): Process configuration; loaded from the
            environment when omitted.
        client (Optional[KnowledgeBaseClient]): Knowledge base client; built by
            the provider factory when omitted. Tests inject an in-memory client.

    Returns:
        FastAPI: The configured application. The client is closed on shutdown.

    Raises:
        ConfigMissingError: If `settings` is omitted and a required variable is missing.
    """
    if settings is None:
        settings = load_settings()
    if client is None:
        client = get_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await client.close()

    app = FastAPI(title="Knowledge Base Gateway", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = build_gateway(settings, client)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GatewayError, _gateway_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(health_router.router, tags=["Health"])
    app.include_router(files_router.router, tags=["Files"])

    app.mount("/metrics", make_asgi_app())

    logger.info("Gateway app created for vector store %s", settings.openai_vector_store_id)
    return app


def run() -> None:
    """
    Load configuration, then serve the gateway with Uvicorn.

    Exits with status 1, without binding a port, when a required environment
    variable is missing.
    """
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigMissingError as exc:
        setup_app_logging()
        logger.critical("Configuration error - missing variables: %s", ", ".join(exc.missing))
        sys.exit(1)

    setup_app_logging(settings.log_config)
    app = create_app(settings)
    logger.info("Starting gateway on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
