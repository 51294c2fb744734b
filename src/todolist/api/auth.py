"""Auth API — registration, login, current user.

Learn: Routes for user authentication:
- POST /auth/register → create account, returns token + public user
- POST /auth/login → login/password → token + public user
- GET /auth/me → the bearer's public user fields

The token is also echoed in the Authorization response header.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.auth.dependencies import get_current_user_id
from todolist.context import AppContext, get_context
from todolist.db.engine import get_db
from todolist.schemas.auth import AuthRequest, AuthResponse, UserRead, UserResponse
from todolist.services.errors import ConflictError, NotFoundError, WrongPasswordError
from todolist.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _user_svc(
    db: AsyncSession = Depends(get_db),
    ctx: AppContext = Depends(get_context),
) -> UserService:
    return UserService(db, bcrypt_rounds=ctx.settings.bcrypt_rounds)


def _token_lifetime(ctx: AppContext) -> str:
    minutes = ctx.tokens.expires_minutes
    return f"{minutes // 60}h" if minutes % 60 == 0 else f"{minutes}m"


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse)
async def register(
    body: AuthRequest,
    response: Response,
    svc: UserService = Depends(_user_svc),
    ctx: AppContext = Depends(get_context),
):
    """Create a new user account and sign them in."""
    try:
        user = await svc.register(body.login, body.password)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    token = ctx.tokens.issue(str(user.id))
    response.headers["Authorization"] = f"Bearer {token}"
    return AuthResponse(
        message=f"You've signed up, your token is valid for {_token_lifetime(ctx)}",
        token=token,
        user=UserRead.model_validate(user),
    )


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(
    body: AuthRequest,
    response: Response,
    svc: UserService = Depends(_user_svc),
    ctx: AppContext = Depends(get_context),
):
    """Login with login and password → JWT token."""
    try:
        user = await svc.authenticate(body.login, body.password)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except WrongPasswordError as e:
        raise HTTPException(status_code=406, detail=str(e))

    token = ctx.tokens.issue(str(user.id))
    response.headers["Authorization"] = f"Bearer {token}"
    return AuthResponse(
        message=f"You've signed in, your token is valid for {_token_lifetime(ctx)}",
        token=token,
        user=UserRead.model_validate(user),
    )


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserResponse)
async def get_me(
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: UserService = Depends(_user_svc),
):
    """Get the current authenticated user's public fields."""
    user = await svc.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse(message=UserRead.model_validate(user))
