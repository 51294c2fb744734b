"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running
and the database is reachable.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text

from todolist import __version__
from todolist.context import AppContext, get_context

router = APIRouter()


@router.get("/health")
async def health_check(ctx: AppContext = Depends(get_context)):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with ctx.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
