"""
learnkit - FastAPI Main Application

Online-learning primitives served as stateful instances:
- Multi-armed bandits (epsilon-greedy arm selection)
- Sequential 1-D black-box optimizer (adaptive-step local search)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

# Load environment variables first
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from learnkit.config.settings import settings
from learnkit.routers import bandit_routes, optimizer_routes
from learnkit.services.learning import BanditRegistry, LearningError, OptimizerRegistry
from learnkit.services.metrics import set_live_instances

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "NotFound": 404,
    "InvalidConfig": 400,
    "InvalidArm": 400,
    "InvalidValue": 400,
    "NoPendingSuggestion": 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager"""
    logger.info("🚀 Starting learnkit API...")
    logger.info(f"📊 Metrics enabled: {settings.ENABLE_METRICS}")
    logger.info(f"🎲 Default seed: {settings.DEFAULT_SEED}")

    app.state.bandit_registry = BanditRegistry(
        on_size_change=lambda n: set_live_instances("bandit", n)
    )
    app.state.optimizer_registry = OptimizerRegistry(
        on_size_change=lambda n: set_live_instances("optimizer", n)
    )

    yield

    logger.info("👋 Shutting down learnkit API...")
    app.state.bandit_registry.clear()
    app.state.optimizer_registry.clear()


# Create FastAPI application
app = FastAPI(
    title="learnkit API",
    description="Stateful multi-armed bandits and black-box optimizers",
    version="1.0.0",
    lifespan=lifespan,
)


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "metrics_enabled": settings.ENABLE_METRICS,
    }


@app.get("/", tags=["system"])
async def root():
    """Root endpoint with API info"""
    return {
        "name": "learnkit API",
        "version": "1.0.0",
        "endpoints": {
            "bandit": "/api/bandit",
            "optimizer": "/api/optimizer",
            "metrics": "/metrics",
        },
        "docs": "/docs",
    }


# Mount Prometheus metrics endpoint
if settings.ENABLE_METRICS:
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)


app.include_router(bandit_routes.router, prefix="/api/bandit", tags=["bandit"])
app.include_router(optimizer_routes.router, prefix="/api/optimizer", tags=["optimizer"])


@app.exception_handler(LearningError)
async def learning_error_handler(request: Request, exc: LearningError):
    status_code = ERROR_STATUS_CODES.get(exc.kind, 400)
    logger.warning(f"⚠️  {request.method} {request.url.path} rejected: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.LOG_LEVEL == "DEBUG" else "An error occurred",
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "learnkit.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )
