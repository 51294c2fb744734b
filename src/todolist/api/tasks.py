"""Task API routes.

Learn: Status codes differ from the list routes on purpose:
- creating a task in a list you don't subscribe to → 406
- changing status of a task in a list you don't subscribe to → 403
- deleting a task you didn't author → 403
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.auth.dependencies import get_current_user_id
from todolist.db.engine import get_db
from todolist.schemas.common import MessageResponse
from todolist.schemas.task import (
    TaskCreate,
    TaskDelete,
    TaskRead,
    TaskResponse,
    TaskStatusUpdate,
)
from todolist.services.errors import NotAuthorError, NotFoundError, NotMemberError
from todolist.services.task_service import TaskService

router = APIRouter(prefix="/task")


def _task_svc(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)


@router.post("", response_model=TaskResponse)
async def create_task(
    body: TaskCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: TaskService = Depends(_task_svc),
):
    """Create a task in a list the caller subscribes to."""
    try:
        task = await svc.create_task(
            list_id=body.list_id,
            title=body.title,
            body=body.body,
            author_id=user_id,
            status=body.status,
            deadline=body.deadline,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotMemberError as e:
        raise HTTPException(status_code=406, detail=str(e))
    return TaskResponse(message=TaskRead.model_validate(task))


@router.put("", response_model=MessageResponse)
async def update_task_status(
    body: TaskStatusUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: TaskService = Depends(_task_svc),
):
    """Change a task's status (subscribers of the parent list only)."""
    try:
        await svc.change_status(body.id, body.status, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotMemberError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return MessageResponse(message="Task updated")


@router.delete("", response_model=MessageResponse)
async def delete_task(
    body: TaskDelete,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: TaskService = Depends(_task_svc),
):
    """Delete a task (its author only)."""
    try:
        await svc.delete_task(body.id, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotAuthorError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return MessageResponse(message="Task deleted")
