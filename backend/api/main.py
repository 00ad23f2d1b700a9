"""
FastAPI application for the draft simulator.

create_app wires the draft store, player pool and auto-draft runner
onto app.state; tests build their own app with overrides.
"""

import logging
import random
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..ai.decision_engine import AIDecisionEngine
from ..config import load_config
from ..external.player_pool import PlayerPoolService
from ..simulation.auto_draft import AutoDraftRunner
from ..storage.draft_store import InMemoryDraftStore
from .middleware.cors import setup_cors
from .responses import error_response
from .routes.drafts import router as drafts_router
from .routes.health import router as health_router
from .routes.players import router as players_router

logging.basicConfig(level=logging.INFO,
                    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Fantasy Draft Simulator API...")
    logger.info(f"Player source: {app.state.config.player_source}, AI noise: {app.state.config.ai_noise}")

    yield

    logger.info("Shutting down Fantasy Draft Simulator API...")
    await app.state.player_pool.close()
    logger.info(f"Shutdown complete, discarded {len(await app.state.draft_store.list_ids())} drafts")


def create_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Build the API with its shared services.

    Configuration comes from FANTASY_DRAFT_* environment variables,
    overridden key by key by ``config``.
    """
    app_config = load_config()
    if config:
        app_config = app_config.with_overrides(config)

    app = FastAPI(
        title=app_config.title,
        description=app_config.description,
        version=app_config.version,
        debug=app_config.debug,
        lifespan=lifespan,
        docs_url="/docs" if app_config.debug else None,  # Disable docs in prod
        redoc_url="/redoc" if app_config.debug else None,
    )

    # Services shared by all requests
    rng = random.Random(app_config.random_seed)
    draft_store = InMemoryDraftStore()

    app.state.config = app_config
    app.state.rng = rng
    app.state.draft_store = draft_store
    app.state.player_pool = PlayerPoolService(source=app_config.player_source)
    app.state.runner = AutoDraftRunner(store=draft_store,
                                       engine=AIDecisionEngine(rng=rng, noise=app_config.ai_noise),
                                       thinking_delay_min_ms=app_config.thinking_delay_min_ms,
                                       thinking_delay_max_ms=app_config.thinking_delay_max_ms,
                                       rng=rng)

    setup_cors(app, app_config.cors_origins)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Time every request in X-Process-Time."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests for monitoring and debugging."""
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} - {process_time:.3f}s - {request.method} {request.url.path}"
        )

        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        return error_response(exc.status_code, "http_error", exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        return error_response(422, "validation_error", "Request validation failed", exc.errors())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unexpected error: {exc}", exc_info=True)

        # Don't leak error details in production
        return error_response(500, "internal_error", "An unexpected error occurred",
                              str(exc) if app_config.debug else None)

    app.include_router(health_router, prefix="/api/v1", tags=["health"])
    app.include_router(players_router, prefix="/api/v1", tags=["players"])
    app.include_router(drafts_router, prefix="/api/v1", tags=["drafts"])

    @app.get("/")
    async def root():
        """Service name, version and where to look next."""
        return {
            "name": app_config.title,
            "version": app_config.version,
            "description": app_config.description,
            "docs_url": "/docs" if app_config.debug else None,
            "health_check": "/api/v1/health",
        }

    return app


# Default instance for uvicorn
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
