"""Microblog Backend - FastAPI Application Factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microblog.api import api_router
from microblog.api.errors import register_exception_handlers
from microblog.core import (
    Settings,
    create_engine_from_settings,
    create_session_maker,
    get_settings,
    setup_logging,
)
from microblog.core.logging import get_logger
from microblog.services.passwords import PasswordHasher
from microblog.services.revocation import create_redis_client

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the store clients on startup and close them on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(level=settings.log_level, format_type=settings.log_format)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    engine = create_engine_from_settings(settings)
    app.state.session_maker = create_session_maker(engine)
    app.state.redis = create_redis_client(settings)
    logger.info(f"Revocation store at {settings.redis_addr} db={settings.redis_db}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.redis.aclose()
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Minimal microblogging backend",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.state.settings = settings
    # Built once: constructing the hasher computes a dummy hash
    app.state.password_hasher = PasswordHasher(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["GET", "PUT", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=1000,
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    # Root endpoint
    @app.get("/")
    async def root() -> dict[str, str]:
        return {"msg": "Hello, World!"}

    return app


def run() -> None:
    """Serve the application on LISTEN_ADDRESS."""
    settings = get_settings()
    host, port = settings.listen_host_port
    uvicorn.run(
        "microblog.main:app",
        host=host,
        port=port,
        log_config=None,
    )


# Application instance
app = create_app()
