# app/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.core.logger import setup_logging
from app.core.middleware import setup_middleware
from app.core.exception_handlers import register_exception_handlers
from app.api.v1.router import api_router
from app.modules.transactions.dependencies import get_partner_directory

setup_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} starting...")
    logger.info(f"Version: {settings.version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Timestamp tolerance: {settings.timestamp_tolerance_minutes} minutes")
    logger.info(f"Partners loaded: {len(get_partner_directory())}")

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Partner transaction submission with signature verification and tiered discounts",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
register_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix=settings.api_prefix)

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name}",
        "version": settings.version,
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
        "api": settings.api_prefix
    }

# Health check
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": settings.environment
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
