"""Reading Tracker FastAPI Application."""
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from reading_tracker import __version__
from reading_tracker.config import get_settings
from reading_tracker.database import initialize_connection_pool, close_connection_pool
from reading_tracker.middleware.api_request_logging import ApiRequestLoggingMiddleware
from reading_tracker.models.schemas import HealthCheck
from reading_tracker.routers import admin, auth, profile, progress, reading_plan

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = get_settings()

logger.info(f"CORS allowed origins: {settings.allowed_origins}")
app = FastAPI(
    title=settings.app_name,
    description="365-day reading plan progress tracking",
    version=__version__,
)

app.add_middleware(ApiRequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Initialize resources on application startup."""
    logger.info("Initializing application resources...")
    try:
        initialize_connection_pool(minconn=2, maxconn=20)
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up resources on application shutdown."""
    logger.info("Shutting down application...")
    try:
        close_connection_pool()
        logger.info("Application shutdown complete")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(reading_plan.router)
app.include_router(progress.router)
app.include_router(admin.router)


@app.get("/", response_model=HealthCheck)
async def health_check():
    """Health check endpoint."""
    return HealthCheck(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
    )
