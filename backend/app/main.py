"""Expense Tracker API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExpenseTrackerError → {"error": message} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool initialized on startup and disposed on shutdown via lifespan
    - Each create_app() owns its LivenessState and MetricsRegistry (app.state)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Route label table bound after all routers are included, once per app
    - APP_ENV=test suppresses the listener in run(): the app is driven in-process by tests
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import expenses, health, metrics, salary
from app.config import Settings, get_settings
from app.core.liveness import LivenessState
from app.infrastructure.database import close_db, init_db
from app.infrastructure.metrics import MetricsRegistry, instrument_requests
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.db_pool_size,
        queue_limit=settings.db_pool_queue_limit,
        pool_timeout=settings.db_pool_timeout,
    )
    logger.info("Expense Tracker API started")
    yield
    await close_db()
    logger.info("Expense Tracker API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Expense Tracker API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.liveness = LivenessState()
    app.state.metrics = MetricsRegistry(app.state.liveness)

    # Metrics middleware first so CORS (added last) runs outermost
    instrument_requests(app, app.state.metrics)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_methods,
        allow_headers=settings.cors_headers,
    )

    app.include_router(expenses.router)
    app.include_router(salary.router)
    app.include_router(health.router)
    app.include_router(metrics.router)

    register_error_handlers(app)
    app.state.metrics.bind_routes(app.routes)
    return app


app = create_app()


def run() -> None:
    """Serve the app on HOST:PORT unless running in test mode."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.is_test:
        logger.info("APP_ENV=test: network listener suppressed")
        return
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
