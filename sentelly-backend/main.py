"""
Sentelly - Backend Application

FastAPI application for the AI-assisted dictionary.
Provides word lookup, pronunciation audio, activity logging and analytics.

Features:
    - Word definitions generated by Gemini and cached in the word store
    - Spelling correction with LangChain + Gemini
    - Pronunciation audio with ElevenLabs, kept in object storage
    - Activity log and dashboard analytics

Run:
    python main.py
    # or
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
import uvicorn

from config.settings import settings
from core import database
from core.dependencies import get_initialized_services, shutdown_services
from utils.logging import setup_logging, get_logger
from utils.exceptions import SentellyError
from utils.rate_limit import limiter, rate_limit_exceeded_handler

# Import Routers
from routers import dictionary, speech, activity, analytics

# Initialize logging
setup_logging()
logger = get_logger(__name__)


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events:
        - Startup: Initialize database tables
        - Shutdown: Close vendor clients and the engine
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await database.init_models()

    yield

    # Shutdown
    logger.info("Shutting down application")
    await shutdown_services()
    if database.engine is not None:
        await database.engine.dispose()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="AI-assisted dictionary API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Attach rate limiter to app state
app.state.limiter = limiter


# =============================================================================
# Middleware
# =============================================================================

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=500)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SentellyError)
async def sentelly_exception_handler(request: Request, exc: SentellyError):
    """
    Handle custom Sentelly exceptions.

    Logs the internal message and returns only the public one.
    """
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", extra={"details": exc.details})
    else:
        logger.info(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(dictionary.router)
app.include_router(speech.router)
app.include_router(activity.router)
app.include_router(analytics.router)


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint - basic health check.

    Returns:
        dict: Simple status message
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Detailed health check endpoint.

    Checks:
        - Database connectivity
        - API key configuration
        - Lazy-loaded services status

    Returns:
        dict: Health status with component details
    """
    db_healthy = await database.check_database_health()

    return {
        "status": "healthy" if db_healthy or not settings.persistence_enabled else "degraded",
        "components": {
            "database": db_healthy,
            "gemini_configured": bool(settings.GOOGLE_API_KEY),
            "elevenlabs_configured": bool(settings.ELEVENLABS_API_KEY),
        },
        "services_loaded": get_initialized_services(),
        "version": settings.APP_VERSION
    }


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
