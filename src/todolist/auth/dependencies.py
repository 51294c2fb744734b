"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current user from the request. The bearer token is
read from `Authorization: Bearer <token>` and resolved through
TokenService.authenticate(), so the user id a handler receives has
always been signature- and expiry-checked.
"""

import uuid
from typing import Optional

from fastapi import Depends, Header, HTTPException

from todolist.context import AppContext, get_context


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an Authorization header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    ctx: AppContext = Depends(get_context),
) -> uuid.UUID:
    """Verified user id of the caller (required — 401 if absent or invalid)."""
    token = bearer_token(authorization)
    if token is None:
        raise _unauthorized()

    subject = ctx.tokens.authenticate(token)
    if subject is None:
        raise _unauthorized()

    try:
        return uuid.UUID(subject)
    except ValueError:
        raise _unauthorized()
