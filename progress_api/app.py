"""
FastAPI application factory.

Endpoints:
- /progress*  - completion percentage of a Notion database
- /visit*     - increment and read visit counters
- /allowance* - reserved, answers 501
- OPTIONS *   - CORS preflight, answers 204
"""

import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from progress_api.routers import allowance_router, progress_router, visit_router
from progress_api.stores.counter_store import CounterStore, create_counter_store
from progress_api.utils.config import Settings, get_settings
from progress_api.utils.error_handlers import api_exception_handler, http_exception_handler
from progress_api.utils.exceptions import APIException
from progress_api.utils.logger import clear_correlation_id, configure_logging, get_logger, set_correlation_id

logger = get_logger(__name__, "APP")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Logs the effective configuration and closes the counter store on shutdown.
    """
    settings = app.state.settings
    logger.info("✅ Configuration loaded successfully")
    logger.info(f"   - Counter backend: {settings.counter_backend}")
    logger.info(f"   - Visit time zone: {settings.visit_timezone}")
    logger.info(f"   - Default status property: {settings.default_property_name} = {settings.default_condition}")

    yield  # Application runs here

    logger.info("🛑 Shutting down...")
    await app.state.counter_store.close()


def cors_headers(settings: Settings) -> dict:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": settings.cors_allow_methods,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
    }


def create_app(
    settings: Optional[Settings] = None,
    counter_store: Optional[CounterStore] = None,
    notion_transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Callable] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (read from the environment when None)
        counter_store: Visit counter store (built from settings when None)
        notion_transport: httpx transport for Notion calls (network when None)
        clock: Callable taking a tzinfo and returning the current datetime
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_dir)

    app = FastAPI(
        title="Notion Progress API",
        description="Completion progress of Notion databases and visit counters, as JSON, SVG or HTML.",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.counter_store = counter_store or create_counter_store(settings)
    app.state.notion_transport = notion_transport
    app.state.clock = clock

    headers = cors_headers(settings)

    # =========================
    # CORS preflight, CORS headers and request IDs
    # =========================
    @app.middleware("http")
    async def request_context(request: Request, call_next):
        cid = set_correlation_id(request.headers.get("X-Request-ID"))
        started = time.perf_counter()
        try:
            if request.method == "OPTIONS":
                response = Response(status_code=204)
            else:
                response = await call_next(request)
            response.headers.update(headers)
            response.headers["X-Request-ID"] = cid
            elapsed = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.0f}ms)")
            return response
        finally:
            clear_correlation_id()

    # Register exception handlers
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Include routers
    app.include_router(progress_router)
    app.include_router(visit_router)
    app.include_router(allowance_router)

    return app
