"""Task service — tasks inside shared lists.

Learn: Authorization differs per operation:
- create: requester must subscribe to the target list
- change status: requester must subscribe to the task's parent list
- delete: requester must be the task's author

A task created without a deadline is due 24 hours from now.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.db.models import Task, TodoList
from todolist.services.errors import NotFoundError
from todolist.services.membership import require_author, require_subscriber

logger = structlog.get_logger()

DEFAULT_DEADLINE = timedelta(hours=24)


class TaskService:
    """Business logic for task CRUD."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_task(self, task_id: uuid.UUID) -> Optional[Task]:
        return await self.db.get(Task, task_id)

    async def _get_or_raise(self, task_id: uuid.UUID) -> Task:
        task = await self.get_task(task_id)
        if not task:
            raise NotFoundError("Task not found")
        return task

    async def _list_or_raise(self, list_id: uuid.UUID) -> TodoList:
        todo_list = await self.db.get(TodoList, list_id)
        if not todo_list:
            raise NotFoundError("List not found")
        return todo_list

    # ─── Create ──────────────────────────────────────────

    async def create_task(
        self,
        list_id: uuid.UUID,
        title: str,
        body: str,
        author_id: uuid.UUID,
        status: str = "ACTIVE",
        deadline: Optional[datetime] = None,
    ) -> Task:
        """Create a task in a list the author subscribes to.

        Raises:
            NotFoundError: the list does not exist
            NotMemberError: the author is not a subscriber of the list
        """
        todo_list = await self._list_or_raise(list_id)
        await require_subscriber(self.db, author_id, todo_list)

        task = Task(
            list_id=list_id,
            title=title,
            body=body,
            author_id=author_id,
            status=status,
            deadline=deadline or datetime.now(timezone.utc) + DEFAULT_DEADLINE,
        )
        self.db.add(task)
        await self.db.commit()

        logger.info(
            "task.created",
            task_id=str(task.id),
            list_id=str(list_id),
            author_id=str(author_id),
        )
        return task

    # ─── Update ──────────────────────────────────────────

    async def change_status(
        self, task_id: uuid.UUID, status: str, user_id: uuid.UUID
    ) -> Task:
        """Set a task's status. Any subscriber of the parent list may do this."""
        task = await self._get_or_raise(task_id)
        todo_list = await self._list_or_raise(task.list_id)
        await require_subscriber(self.db, user_id, todo_list)

        old_status = task.status
        task.status = status
        await self.db.commit()

        logger.info(
            "task.status_changed",
            task_id=str(task_id),
            old_status=old_status,
            new_status=status,
            user_id=str(user_id),
        )
        return task

    # ─── Delete ──────────────────────────────────────────

    async def delete_task(self, task_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Delete a task. Only its author may do this."""
        task = await self._get_or_raise(task_id)
        require_author(task, user_id)

        await self.db.delete(task)
        await self.db.commit()

        logger.info("task.deleted", task_id=str(task_id), user_id=str(user_id))
