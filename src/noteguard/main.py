# Main application entry point
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import admin_router, auth_router, health_router, notes_router
from .config import get_settings
from .core.exception_handlers import register_exception_handlers
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.services import AuthService, CleanupScheduler
from .database import AsyncSessionLocal, create_tables

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


async def bootstrap_admin() -> None:
    """Create the configured admin account when it does not exist yet."""
    if not (settings.admin_username and settings.admin_password):
        return
    async with AsyncSessionLocal() as session:
        await AuthService(session).ensure_admin(settings.admin_username, settings.admin_password)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting NoteGuard application",
        extra={"version": settings.app_version, "environment": settings.environment, "debug": settings.debug},
    )

    try:
        await create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error("Failed to create database tables", exc_info=e)
        raise

    await bootstrap_admin()

    scheduler: CleanupScheduler = app.state.cleanup_scheduler
    if settings.cleanup_enabled:
        scheduler.start()

    yield

    # Shutdown
    logger.info("Shutting down NoteGuard application")
    await scheduler.stop()


app = FastAPI(
    title=settings.app_name,
    description="Encrypted notes with expiring share links",
    version=settings.app_version,
    lifespan=lifespan,
)

app.state.cleanup_scheduler = CleanupScheduler(
    AsyncSessionLocal, interval_seconds=settings.cleanup_interval_seconds
)

register_exception_handlers(app)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(health_router, prefix="/api")


# API root endpoint for better navigation
@app.get("/api/")
async def api_root():
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
        "endpoints": {
            "authentication": "/api/auth/",
            "notes": "/api/notes/",
            "admin": "/api/admin/",
            "health": "/api/health/",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("noteguard.main:app", host=settings.host, port=settings.port, reload=settings.debug)
