"""FastAPI main application."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from config import get_settings
from exceptions import ConfigurationError
from logging_config import setup_logging, get_logger
from models import init_db
from api.middleware import setup_middleware
from api.routes import loads, trucks, health

settings = get_settings()

setup_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    logger.info("api_starting", app_env=settings.app_env)

    errors = settings.validate_required_settings()
    if errors:
        raise ConfigurationError("; ".join(errors))

    init_db()
    logger.info("database_initialized")

    yield

    logger.info("api_stopping")


app = FastAPI(
    title="Freight Katha Engine",
    description="Load lifecycle and payment reconciliation for freight brokers",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)

app.include_router(health.router, tags=["Health"])
app.include_router(loads.router, prefix="/api", tags=["Loads"])
app.include_router(trucks.router, prefix="/api", tags=["Trucks"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Freight Katha Engine",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
