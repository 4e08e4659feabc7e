"""RentLedger - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import RentLedgerError
from .core.logging import (
    RequestLoggingMiddleware,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .database import init_db

# Import routers
from .modules.archive.routers import router as archive_router
from .modules.auth.routers import router as auth_router
from .modules.auth.routers import users_router
from .modules.dashboard.routers import router as dashboard_router
from .modules.portfolio.routers import landlords_router, property_types_router
from .modules.portfolio.routers import router as estates_router
from .modules.reporting.routers import router as reports_router
from .modules.sync.routers import router as backup_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging(settings)
    logger.info("Starting RentLedger application...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Debug mode: {settings.app_debug}")
    await init_db()
    yield
    # Shutdown
    logger.info("Shutting down RentLedger application...")
    shutdown_logging()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description="Rental portfolio ledger with scoped visibility, dashboards and reports",
    version=settings.api_version,
    docs_url="/api/docs" if settings.app_debug else None,
    redoc_url="/api/redoc" if settings.app_debug else None,
    openapi_url="/api/openapi.json" if settings.app_debug else None,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Transaction id per request for log correlation
app.add_middleware(RequestLoggingMiddleware)


# Global exception handler
@app.exception_handler(RentLedgerError)
async def rentledger_exception_handler(request: Request, exc: RentLedgerError):
    """Handle RentLedger-specific exceptions."""
    status_code = getattr(exc, "status_code", 400)
    logger.warning(
        f"{request.method} {request.url.path} refused: {exc.message}",
        extra={"status_code": status_code, "details": exc.details},
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": exc.message,
            "error": exc.message,
            "data": None,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error": str(exc) if settings.app_debug else "Internal server error",
            "data": None,
        },
    )


# Health check endpoint
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.api_version,
        "env": settings.app_env,
    }


API_PREFIX = settings.api_prefix

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(users_router, prefix=API_PREFIX)

# Portfolio
app.include_router(estates_router, prefix=API_PREFIX)
app.include_router(landlords_router, prefix=API_PREFIX)
app.include_router(property_types_router, prefix=API_PREFIX)

# Dashboard & reports
app.include_router(dashboard_router, prefix=API_PREFIX)
app.include_router(reports_router, prefix=API_PREFIX)

# Archive & backup
app.include_router(archive_router, prefix=API_PREFIX)
app.include_router(backup_router, prefix=API_PREFIX)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rentledger_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
