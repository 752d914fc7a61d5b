"""
FastAPI application entry point for the lead-generation inference layer.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from leadgen_inference.api.dependencies import close_provider_clients
from leadgen_inference.api.error_handlers import EXCEPTION_HANDLERS
from leadgen_inference.api.middleware import RequestTracingMiddleware
from leadgen_inference.api.routes import router
from leadgen_inference.config import settings
from leadgen_inference.logging_config import configure_logging

# Configure structured logging before the app starts emitting events
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log provider configuration on startup, close pooled clients on shutdown."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        primary_model=settings.OPENAI_MODEL,
        secondary_model=settings.GEMINI_MODEL,
        openai_configured=settings.openai_configured,
        gemini_configured=settings.gemini_configured,
    )
    if not (settings.openai_configured or settings.gemini_configured):
        logger.warning("No AI provider configured, identification requests will fail with 503")

    yield

    logger.info("Application shutdown")
    await close_provider_clients()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Decision-maker and industry identification with provider fallback",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Request tracing middleware (must be first for request_id in all logs)
    app.add_middleware(RequestTracingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(router, tags=["identification"])

    if settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    @app.get("/")
    async def root():
        """Root endpoint with API documentation links."""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "leadgen_inference.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
