"""FastAPI application factory.

Main entry point for the Tutorials Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tutorials import __version__
from tutorials.config.app_config import AppConfig, load_app_config
from tutorials.db.database import open_gateway
from tutorials.db.tutorials_repository import TutorialsRepository
from tutorials.web.errors import register_exception_handlers
from tutorials.web.routes import (
    health_router,
    home_router,
    tutorials_router,
)

logger = structlog.get_logger(__name__)


def _make_lifespan(config: AppConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the database gateway at startup and close it at shutdown."""
        if app.state.repository is not None:
            # Injected repository (tests, embedding): nothing to open
            yield
            return

        try:
            gateway = await open_gateway(config.database)
        except Exception as e:
            logger.error("api_startup_failed", error=str(e))
            raise

        app.state.gateway = gateway
        app.state.repository = TutorialsRepository(gateway.collection)
        logger.info("api_startup", database=gateway.database_name)
        try:
            yield
        finally:
            gateway.close()
            app.state.repository = None
            app.state.gateway = None
            logger.info("api_shutdown")

    return lifespan


def create_app(
    config: AppConfig | None = None,
    repository: TutorialsRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config. Defaults to load_app_config().
        repository: Pre-built repository. When given, no database
            connection is opened at startup.

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="Tutorials API",
        description="CRUD API for tutorials",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=_make_lifespan(config),
    )
    app.state.config = config
    app.state.repository = repository
    app.state.gateway = None

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials="*" not in config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(home_router)
    app.include_router(health_router)
    app.include_router(tutorials_router)

    return app


# Default app instance for uvicorn
app = create_app()
