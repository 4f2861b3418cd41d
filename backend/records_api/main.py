"""Records API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ServiceError → structured JSON responses
    - CORS configured from a validated settings allow-list (not hardcoded)
    - Database connected on startup via lifespan; a failed connect does not stop startup
    - ProcessMetrics and PasswordHasher are created once per process and
      hung on app.state; the request counter is injected into the middleware

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from records_api.api.error_handlers import register_error_handlers
from records_api.api.middleware import RequestLoggingMiddleware
from records_api.api.routes import accounts, health, records
from records_api.config import Settings, get_settings
from records_api.core.errors import DependencyError
from records_api.infrastructure.database import close_db, init_db
from records_api.infrastructure.observability import ProcessMetrics, setup_logging
from records_api.infrastructure.password_hasher import PasswordHasher
from records_api.services.handle_accounts import seed_admin_account

logger = logging.getLogger(__name__)


async def _seed_admin(app: FastAPI, settings: Settings, manager) -> None:
    try:
        async with manager.session() as db:
            await seed_admin_account(
                db,
                app.state.password_hasher,
                settings.admin_seed_username,
                settings.admin_seed_email,
                settings.admin_seed_password,
            )
    except DependencyError as e:
        logger.error(f"Admin seeding failed: {e.message}", extra={"error_code": e.code})


def _log_banner(settings: Settings, connected: bool, backend: str) -> None:
    logger.info(
        f"Records API started on {settings.host}:{settings.port} "
        f"(environment={settings.environment}, database={backend}, "
        f"connected={connected}, pid={os.getpid()})",
    )
    if settings.admin_bypass_enabled:
        logger.warning("Admin login bypass is enabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        timeout_seconds=settings.database_timeout_seconds,
        pool_pre_ping=settings.database_pool_pre_ping,
    )
    connected = await manager.connect()
    if connected and settings.admin_seed_configured:
        await _seed_admin(app, settings, manager)
    _log_banner(settings, connected, manager.backend_name)
    yield
    logger.info("Records API shutting down")
    await close_db()


settings = get_settings()
metrics = ProcessMetrics()

app = FastAPI(title="Records API", version="1.0.0", lifespan=lifespan)
app.state.metrics = metrics
app.state.password_hasher = PasswordHasher(settings.password_hash_iterations)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=not settings.allow_any_origin,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
# Added last so it wraps CORS: preflights are counted and logged too
app.add_middleware(RequestLoggingMiddleware, counter=metrics.requests)

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(records.router)

register_error_handlers(app)


def run() -> None:
    uvicorn.run("records_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
