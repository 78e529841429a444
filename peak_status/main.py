"""
Main application entry point for the Peak Status API service.
Initializes FastAPI app and the schedule store, and starts the service.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from peak_status.api.routes import router as api_router
from peak_status.config import settings
from peak_status.database.service import DatabaseService
from peak_status.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown procedures.
    The schedule store lives exactly as long as the application.
    """
    # Startup
    setup_logging()
    store = DatabaseService(settings.database_url)
    await store.init_database()
    app.state.schedule_store = store
    logger.info("Peak status service started", timezone=settings.tariff_timezone)

    yield

    # Shutdown
    await store.close()
    logger.info("Peak status service stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title="Peak Status API",
        description="On-peak / off-peak electricity tariff status for MEA and PEA",
        version="1.0.0",
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        lifespan=lifespan,
    )

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "peak_status.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
