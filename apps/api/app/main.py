import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.database import Database

from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.db import create_database, ensure_indexes
from app.monitoring import MetricsMiddleware, router as monitoring_router
from app.repositories.user import UserRepository
from app.routers import health, install, login, posts, profile, registration, users_count


logger = logging.getLogger(__name__)


def prepare_database(database: Database) -> None:
    """Create indexes and seed the admin counter before serving requests."""

    ensure_indexes(database)
    UserRepository().ensure_admin_counter(database)


def create_app(settings: Settings | None = None, *, database: Database | None = None) -> FastAPI:
    """Build the API around explicit settings and an optional database handle.

    When ``database`` is omitted a client for ``settings.mongodb_uri`` is
    opened and closed with the application lifespan.
    """

    active_settings = settings or get_settings()
    owns_client = database is None
    active_database = database if database is not None else create_database(active_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        prepare_database(active_database)
        logger.info("Connected to MongoDB database %s", active_database.name)
        yield
        if owns_client:
            active_database.client.close()

    app = FastAPI(
        title=active_settings.app_name,
        version=active_settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = active_settings
    app.state.database = active_database

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=active_settings.resolved_cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(registration.router)
    app.include_router(login.router)
    app.include_router(profile.router)
    app.include_router(posts.router)
    app.include_router(install.router)
    app.include_router(users_count.router)
    app.include_router(health.router)
    app.include_router(monitoring_router)
    return app


app = create_app()


def run() -> None:
    """Serve ``app`` with uvicorn on the configured host and ``PORT``."""

    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    run()
