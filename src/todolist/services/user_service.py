"""User service — registration and credential checks.

Learn: Login uniqueness is checked up front for a friendly 409, but the
unique constraint on users.login is the real guard: two concurrent
registrations race to the INSERT and the loser's IntegrityError is
turned into the same ConflictError.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from todolist.auth.password import hash_password, verify_password
from todolist.db.models import User
from todolist.services.errors import ConflictError, NotFoundError, WrongPasswordError

logger = structlog.get_logger()


class UserService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession, bcrypt_rounds: int = 10):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    async def get_by_login(self, login: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.login == login))
        return result.scalars().first()

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def register(self, login: str, password: str) -> User:
        """Create a user with a bcrypt-hashed password.

        Raises:
            ConflictError: if the login is already registered
        """
        if await self.get_by_login(login):
            raise ConflictError("User already exists")

        password_hash = await run_in_threadpool(
            hash_password, password, self.bcrypt_rounds
        )
        user = User(login=login, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")

        logger.info("auth.registered", user_id=str(user.id), login=login)
        return user

    async def authenticate(self, login: str, password: str) -> User:
        """Check credentials and return the user.

        Raises:
            NotFoundError: unknown login
            WrongPasswordError: password does not match
        """
        user = await self.get_by_login(login)
        if not user:
            raise NotFoundError("User not found")

        ok = await run_in_threadpool(verify_password, password, user.password_hash)
        if not ok:
            logger.info("auth.login_failed", user_id=str(user.id))
            raise WrongPasswordError("Wrong password")

        logger.info("auth.logged_in", user_id=str(user.id))
        return user
