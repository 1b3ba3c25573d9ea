"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitness_tracker.api.errors import register_exception_handlers
from fitness_tracker.api.v1 import api_router
from fitness_tracker.core.config import Settings, get_settings
from fitness_tracker.db.session import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: optionally create tables (use Alembic in production); shutdown: dispose the engine."""
    database: Database = app.state.database
    if app.state.settings.create_tables_on_startup:
        await database.create_all()
        logger.info("Database tables ensured")
    yield
    await database.dispose()


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    # CORS: allow everything in debug, localhost in dev, CORS_ORIGINS (comma-separated) otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Fitness Tracker API"}

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app
