"""Health endpoint tests."""

import pytest

from todolist import __version__


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "healthy"
    assert data["database"] == "ok"
    assert data["version"] == __version__
