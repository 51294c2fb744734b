"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. It builds the AppContext (settings, engine, token service)
once and stores it on app.state; handlers reach it through
dependencies, never through module globals. Lifespan manages
startup/shutdown of the database engine.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todolist import __version__
from todolist.api import api_router
from todolist.api.errors import register_exception_handlers
from todolist.config import Settings, get_settings
from todolist.context import build_context
from todolist.db.models import Base

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs
    at shutdown.
    """
    ctx = app.state.context
    logger.info(
        "todolist.starting",
        version=__version__,
        environment=ctx.settings.environment,
        port=ctx.settings.port,
    )

    if ctx.settings.create_tables:
        async with ctx.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("todolist.tables_created")

    yield

    logger.info("todolist.shutdown")
    await ctx.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo-list API",
        description="Shared to-do lists: users, lists, subscriptions and tasks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = build_context(settings)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → JSONBody → handler

    from todolist.middleware.json_body import JSONBodyMiddleware
    from todolist.middleware.request_id import RequestIdMiddleware
    from todolist.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(JSONBodyMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Authorization", "X-Request-ID"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: todolist.main:app)
app = create_app()
