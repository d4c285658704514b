"""PlantWatch FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plantwatch import __version__
from plantwatch.api.errors import register_exception_handlers
from plantwatch.api.routers import health, plants
from plantwatch.api.schemas import StatusResponse
from plantwatch.core import setup_logging
from plantwatch.core.config import Settings, get_settings
from plantwatch.core.core import PlantCare
from plantwatch.models import Base, create_session_factory

logger = logging.getLogger("plantwatch.api")


def create_app(settings: Settings | None = None, http_client: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the application.

    ``http_client`` replaces the client used for weather requests; when
    given, the caller owns it and it is not closed at shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler — startup and shutdown."""
        setup_logging(settings.log_level)

        # Database
        engine, SessionFactory = create_session_factory(settings.database_url)
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized")

        client = http_client or httpx.AsyncClient(timeout=settings.weather_timeout_seconds, follow_redirects=True)
        app.state.service = PlantCare(settings, SessionFactory, client)

        logger.info(f"PlantWatch v{__version__} started on http://{settings.host}:{settings.port}")
        yield

        # Shutdown
        if http_client is None:
            await client.aclose()
        engine.dispose()
        logger.info("PlantWatch shutdown complete")

    app = FastAPI(
        title="PlantWatch",
        description="Plant water and humidity needs compared against historical weather",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(plants.router, prefix="/plants", tags=["plants"])
    app.include_router(health.router, prefix="/plants", tags=["health"])

    @app.get("/status", response_model=StatusResponse, tags=["system"])
    async def status():
        return StatusResponse(status="ok", service="plantwatch", version=__version__)

    return app


app = create_app()
