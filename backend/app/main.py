from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
import logging

from app.core.config import settings
from app.core.logging import setup_logging
from app.core.exceptions import (
    LaunchZoneException, launchzone_exception_handler,
    sqlalchemy_exception_handler, general_exception_handler
)
from app.core.rate_limiting import limiter, custom_rate_limit_exceeded_handler
from app.db.session import SessionLocal
from app.services.ai.parsing import parse_monitor
from app.services.job_service import JobService
from app.services.report_generator import get_browser_pool
from app.api.v1.api import api_router

# Set up logging
setup_logging()

logger = logging.getLogger(__name__)


def sweep_stale_jobs_on_startup() -> None:
    db = SessionLocal()
    try:
        JobService.fail_stale_jobs(db)
    except SQLAlchemyError as e:
        logger.error(f"Stale job sweep failed on startup: {e}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Startup
    sweep_stale_jobs_on_startup()

    yield

    # Shutdown
    await get_browser_pool().close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="AI-powered brand generation: logos, names, social posts and analytics reports",
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

# Add rate limiter to app
app.state.limiter = limiter

# Exception handlers
app.add_exception_handler(RateLimitExceeded, custom_rate_limit_exceeded_handler)
app.add_exception_handler(LaunchZoneException, launchzone_exception_handler)
app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
async def root():
    return {"message": "LaunchZone Brand Studio API is running"}

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "jobExecutionMode": settings.JOB_EXECUTION_MODE,
        "parsing": parse_monitor.snapshot(),
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=True)
