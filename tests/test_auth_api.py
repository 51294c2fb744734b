"""Auth API tests.

Learn: Tests cover:
1. Registration + duplicate prevention (409)
2. Login → token, unknown login (404), wrong password (406)
3. Token subject matches the returned user id
4. Input bounds (400)
5. Protected /auth/me with and without a token
"""

import jwt
import pytest


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(client):
    """Register returns a token and the public user fields."""
    r = await client.post(
        "/auth/register", json={"login": "alice", "password": "secret12"}
    )
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["user"]["login"] == "alice"
    assert "id" in data["user"]
    assert data["token"]
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]
    assert r.headers["Authorization"] == f"Bearer {data['token']}"


@pytest.mark.asyncio
async def test_register_duplicate_login(client):
    """Can't register the same login twice."""
    r1 = await client.post("/auth/register", json={"login": "alice", "password": "secret12"})
    assert r1.status_code == 200

    r2 = await client.post("/auth/register", json={"login": "alice", "password": "other"})
    assert r2.status_code == 409
    assert r2.json() == {"success": False, "message": "User already exists"}


@pytest.mark.asyncio
async def test_token_subject_matches_user_id(client, jwt_secret):
    r = await client.post("/auth/register", json={"login": "alice", "password": "secret12"})
    data = r.json()

    payload = jwt.decode(data["token"], jwt_secret, algorithms=["HS256"])
    assert payload["sub"] == data["user"]["id"]


@pytest.mark.asyncio
async def test_tokens_have_fixed_length(make_user):
    a = await make_user("alice")
    b = await make_user("bobby")
    assert len(a["token"]) == len(b["token"])


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"login": "al", "password": "secret12"},
        {"login": "alice", "password": "pw"},
        {"login": "a" * 256, "password": "secret12"},
        {"login": "alice"},
        {"password": "secret12"},
        {"login": 12345, "password": "secret12"},
    ],
)
async def test_register_invalid_input(client, body):
    r = await client.post("/auth/register", json=body)
    assert r.status_code == 400
    data = r.json()
    assert data["success"] is False
    assert data["message"] == "Invalid input"
    assert len(data["errors"]) > 0


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client, make_user, jwt_secret):
    user = await make_user("alice", "secret12")

    r = await client.post("/auth/login", json={"login": "alice", "password": "secret12"})
    assert r.status_code == 200
    data = r.json()
    assert data["user"] == {"id": user["id"], "login": "alice"}

    payload = jwt.decode(data["token"], jwt_secret, algorithms=["HS256"])
    assert payload["sub"] == user["id"]


@pytest.mark.asyncio
async def test_login_wrong_password(client, make_user):
    await make_user("alice", "secret12")

    r = await client.post("/auth/login", json={"login": "alice", "password": "wrong-one"})
    assert r.status_code == 406
    assert r.json()["message"] == "Wrong password"


@pytest.mark.asyncio
async def test_login_unknown_user(client):
    r = await client.post("/auth/login", json={"login": "nobody", "password": "whatever"})
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_login_invalid_input(client):
    r = await client.post("/auth/login", json={"login": "al", "password": "x"})
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert fields == {"login", "password"}


# ═══════════════════════════════════════════════════════════
# Current user
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_me_with_token(client, alice):
    r = await client.get("/auth/me", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["message"] == {"id": alice["id"], "login": "alice"}


@pytest.mark.asyncio
async def test_me_without_token(client):
    r = await client.get("/auth/me")
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Unauthorized"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    ["Bearer invalid_token_here", "Bearer ", "Basic abc", "token-without-scheme"],
)
async def test_me_with_bad_authorization_header(client, header):
    r = await client.get("/auth/me", headers={"Authorization": header})
    assert r.status_code == 401
