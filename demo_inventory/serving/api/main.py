"""
FastAPI Application Factory

Creates and configures the inventory API application.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
import structlog

from demo_inventory.config import Settings, get_settings
from demo_inventory.config.logging import configure_logging
from demo_inventory.data.seed import seed_catalog
from demo_inventory.database.connection import close_database, init_database
from demo_inventory.serving.api.dependencies import InMemoryStore
from demo_inventory.serving.api.error_handlers import register_error_handlers
from demo_inventory.serving.api.middleware import RequestLoggingMiddleware
from demo_inventory.serving.api.routes import (
    analytics_router,
    categories_router,
    health_router,
    products_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    configure_logging(settings=settings)

    logger.info(
        "Starting Demo Inventory API",
        version=settings.version,
        environment=settings.app_env,
        in_memory=settings.use_in_memory_db,
    )

    if not settings.use_in_memory_db:
        try:
            await init_database(settings)
            logger.info("Database initialized")
        except Exception as e:
            logger.warning("Database init failed", error=str(e))
    elif settings.seed_demo_data:
        store: InMemoryStore = app.state.store
        await seed_catalog(store.categories, store.products)

    yield

    logger.info("Shutting down...")
    if not settings.use_in_memory_db:
        await close_database()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to run with (cached environment settings when omitted)

    Returns:
        Configured FastAPI app instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Demo Inventory API",
        description="Product catalog and category analytics microservice",
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = InMemoryStore() if settings.use_in_memory_db else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_error_handlers(app)

    # Analytics before categories so /api/categories/analytics is not
    # captured by /api/categories/{category_id}
    app.include_router(health_router, prefix="/api", tags=["Health"])
    app.include_router(products_router, prefix="/api/products", tags=["Products"])
    app.include_router(analytics_router, prefix="/api/categories/analytics", tags=["Category Analytics"])
    app.include_router(categories_router, prefix="/api/categories", tags=["Categories"])

    if settings.monitoring.metrics_enabled:
        @app.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            """Prometheus scrape endpoint."""
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/api/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": "Demo Inventory API",
            "version": settings.version,
            "environment": settings.app_env,
            "storage": "in-memory" if settings.use_in_memory_db else "postgresql",
            "documentation": "/docs",
        }

    return app
