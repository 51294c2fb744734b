"""List service — shared lists and their subscribers.

Learn: Every mutation follows the same order:
1. Load the list (NotFoundError if missing)
2. Check membership (NotMemberError if the requester is not a subscriber)
3. Apply the change and commit

Lists are always loaded with subscribers and tasks eagerly (selectinload),
because async sessions cannot lazy-load relationships during serialization.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from todolist.db.models import TodoList, User
from todolist.services.errors import AlreadySubscribedError, NotFoundError
from todolist.services.membership import require_subscriber

logger = structlog.get_logger()


class ListService:
    """Business logic for list CRUD and membership."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _query(self):
        return select(TodoList).options(
            selectinload(TodoList.subscribers),
            selectinload(TodoList.tasks),
        )

    # ─── Read ────────────────────────────────────────────

    async def get_list(self, list_id: uuid.UUID) -> Optional[TodoList]:
        result = await self.db.execute(
            self._query()
            .where(TodoList.id == list_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def _get_or_raise(self, list_id: uuid.UUID) -> TodoList:
        todo_list = await self.get_list(list_id)
        if not todo_list:
            raise NotFoundError("List not found")
        return todo_list

    async def lists_for_user(self, user_id: uuid.UUID) -> list[TodoList]:
        """All lists user_id subscribes to, oldest first."""
        result = await self.db.execute(
            self._query()
            .where(TodoList.subscribers.any(User.id == user_id))
            .order_by(TodoList.created_at)
        )
        return list(result.scalars().all())

    # ─── Create ──────────────────────────────────────────

    async def create_list(self, title: str, author_id: uuid.UUID) -> TodoList:
        """Create a list with its author as the first subscriber."""
        author = await self.db.get(User, author_id)
        if not author:
            raise NotFoundError("User not found")

        todo_list = TodoList(title=title, author_id=author_id, subscribers=[author])
        self.db.add(todo_list)
        await self.db.commit()

        logger.info("list.created", list_id=str(todo_list.id), author_id=str(author_id))
        return await self._get_or_raise(todo_list.id)

    # ─── Update ──────────────────────────────────────────

    async def update_title(
        self, list_id: uuid.UUID, title: str, user_id: uuid.UUID
    ) -> TodoList:
        """Rename a list. Any subscriber may do this."""
        todo_list = await self._get_or_raise(list_id)
        await require_subscriber(self.db, user_id, todo_list)

        todo_list.title = title
        await self.db.commit()

        logger.info("list.renamed", list_id=str(list_id), user_id=str(user_id))
        return todo_list

    async def delete_list(self, list_id: uuid.UUID, user_id: uuid.UUID) -> TodoList:
        """Delete a list and its tasks. Any subscriber may do this."""
        todo_list = await self._get_or_raise(list_id)
        await require_subscriber(self.db, user_id, todo_list)

        await self.db.delete(todo_list)
        await self.db.commit()

        logger.info("list.deleted", list_id=str(list_id), user_id=str(user_id))
        return todo_list

    # ─── Membership ──────────────────────────────────────

    async def subscribe(
        self,
        list_id: uuid.UUID,
        new_member_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> TodoList:
        """Add new_member_id to the list's subscribers.

        Raises:
            NotFoundError: list or new member does not exist
            NotMemberError: requester is not a subscriber
            AlreadySubscribedError: new member is already a subscriber
        """
        todo_list = await self._get_or_raise(list_id)
        await require_subscriber(self.db, user_id, todo_list)

        new_member = await self.db.get(User, new_member_id)
        if not new_member:
            raise NotFoundError("User not found")

        already = f"User {new_member.login} is already member of {todo_list.title}"
        if new_member_id in todo_list.subscriber_ids:
            raise AlreadySubscribedError(already)

        todo_list.subscribers.append(new_member)
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent subscribe inserted the same (list, user) row first
            await self.db.rollback()
            raise AlreadySubscribedError(already)

        logger.info(
            "list.subscribed",
            list_id=str(list_id),
            new_member_id=str(new_member_id),
            user_id=str(user_id),
        )
        return todo_list
