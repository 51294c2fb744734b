"""Membership authorization — who may act on a list or task.

Learn: Two rules, evaluated fresh on every request:
- Lists are governed by membership. Any subscriber may rename, delete,
  invite, or add tasks; the creator has no extra rights.
- Task deletion is governed by authorship. Only the user who created
  the task may delete it, even though every subscriber can change its
  status.

These helpers only answer questions; services decide which error to raise.
"""

import uuid

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.db.models import Task, TodoList, list_subscribers
from todolist.services.errors import NotAuthorError, NotMemberError


async def is_subscriber(db: AsyncSession, user_id: uuid.UUID, list_id: uuid.UUID) -> bool:
    """True iff user_id is in the list's subscriber set."""
    q = select(
        exists().where(
            list_subscribers.c.list_id == list_id,
            list_subscribers.c.user_id == user_id,
        )
    )
    result = await db.execute(q)
    return bool(result.scalar())


def is_author(task: Task, user_id: uuid.UUID) -> bool:
    return task.author_id == user_id


async def require_subscriber(
    db: AsyncSession, user_id: uuid.UUID, todo_list: TodoList
) -> None:
    """Raise NotMemberError unless user_id subscribes to todo_list."""
    if not await is_subscriber(db, user_id, todo_list.id):
        raise NotMemberError(
            f"You are not member of {todo_list.title}({todo_list.id}). "
            "Please ask author of this Todo-list to add you"
        )


def require_author(task: Task, user_id: uuid.UUID) -> None:
    """Raise NotAuthorError unless user_id created the task."""
    if not is_author(task, user_id):
        raise NotAuthorError("You are not author of this task")
