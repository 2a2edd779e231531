"""
Main FastAPI application entry point.
Initializes the API, database, reconciliation scheduler, and monitoring.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.core.config import get_settings
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMiddleware
from app.database import Database
from app.api.v1.router import api_router
from app.services.networks import build_strategies
from app.services.orchestration.scheduler import ReconciliationScheduler

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the shared database handle and the scheduler, and tears them
    down in reverse order.
    """
    logger.info("Starting Crew Center Backend...")

    database: Database = app.state.database
    logger.info("Initializing database...")
    await database.create_all()

    scheduler: Optional[ReconciliationScheduler] = None
    if settings.ENABLE_SCHEDULER:
        logger.info("Starting reconciliation scheduler...")
        scheduler = ReconciliationScheduler(database, build_strategies(settings))
        await scheduler.start()
    app.state.scheduler = scheduler

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if scheduler:
        await scheduler.stop()
    await database.close()
    logger.info("Application shutdown complete")


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(
        title="Crew Center Backend API",
        description="Virtual airline backend with IVAO/VATSIM flight tracking",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json"
    )
    app.state.database = database or Database.from_settings(settings)
    app.state.scheduler = None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics middleware
    if settings.ENABLE_METRICS:
        app.add_middleware(PrometheusMiddleware)

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Prometheus metrics endpoint
    if settings.ENABLE_METRICS:
        app.mount("/metrics", make_asgi_app())

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "name": "Crew Center Backend API",
            "version": settings.APP_VERSION,
            "status": "running",
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        scheduler: Optional[ReconciliationScheduler] = app.state.scheduler
        return {
            "status": "healthy",
            "scheduler": scheduler.running if scheduler else False,
            "next_runs": {
                network.value: scheduler.get_next_run_time(network)
                for network in scheduler.strategies
            } if scheduler else {}
        }

    return app


def get_application() -> FastAPI:
    setup_logging(settings)
    return create_app()
