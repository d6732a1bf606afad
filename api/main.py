from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contacts import router as contacts_router
from core import settings
from core.db import Database
from core.dependencies import get_db
from core.error_handlers import register_error_handlers
from core.observability import RequestLoggingMiddleware, configure_logging
from projects import router as projects_router

logger = logging.getLogger(__name__)


async def open_database() -> Database:
    database = await Database.connect(
        settings.database_url(),
        ssl_mode=settings.database_ssl_mode(),
        min_size=settings.db_pool_min_size(),
        max_size=settings.db_pool_max_size(),
        command_timeout=settings.db_command_timeout(),
    )
    # Fail fast on a bad DSN or unreachable server.
    now = await database.fetch_value("SELECT now()")
    logger.info("Connected to PostgreSQL (server time %s)", now)
    return database


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the API. Pass `database` to reuse an existing gateway (tests);
    otherwise the lifespan opens and closes its own pool.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if database is not None:
            app.state.db = database
            yield
            return
        app.state.db = await open_database()
        try:
            yield
        finally:
            await app.state.db.close()

    configure_logging()
    app = FastAPI(title="portfolio-backend", version=settings.app_version(), lifespan=lifespan)

    # Origins are deployment config; see CORS_ORIGINS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_error_handlers(app)

    app.include_router(contacts_router.router)
    app.include_router(projects_router.router)

    @app.get("/")
    def root() -> dict:
        return {"message": "portfolio backend is running"}

    @app.get("/api/health")
    async def health(db: Database = Depends(get_db)) -> dict:
        database_ok = await db.ping()
        return {
            "status": "healthy" if database_ok else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version(),
            "environment": settings.app_env(),
            "database": "connected" if database_ok else "unavailable",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port())
