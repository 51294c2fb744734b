"""Application context — process-wide collaborators built once at startup.

Learn: Instead of module-level singletons (settings, engine, signing key)
imported everywhere, create_app() builds one AppContext and stores it on
app.state. Dependencies read it from the request, so two apps with
different settings can live in one process (that is how tests run).
"""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from todolist.auth.jwt import TokenService
from todolist.config import Settings
from todolist.db.engine import build_engine, build_session_factory


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    tokens: TokenService


def build_context(settings: Settings) -> AppContext:
    """Wire up the engine, session factory, and token service."""
    engine = build_engine(settings)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
        tokens=TokenService(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.access_token_expire_minutes,
        ),
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency — the AppContext of the serving app."""
    return request.app.state.context
