# backend/app/main.py
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .errors import register_error_handlers
from .init_db import init_db
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes import bookings, dashboard, health, mentors, prometheus

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if settings.create_tables_on_startup:
        init_db()
    yield
    logger.info(f"{BRAND_NAME} API shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    logger.info("CORS allow_origins=%s allow_credentials=%s", settings.cors_origins, True)
    app.add_middleware(PrometheusMiddleware)

    api = APIRouter(prefix="/api")
    api.include_router(mentors.router, prefix="/mentors")
    api.include_router(dashboard.router, prefix="/dashboard")
    api.include_router(bookings.router, prefix="/bookings")
    app.include_router(api)

    # Infrastructure routes stay unprefixed
    app.include_router(health.router)
    app.include_router(prometheus.router)
    return app


app = create_app()
