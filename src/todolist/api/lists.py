"""List API routes.

Learn: Routes translate HTTP to ListService calls and service errors to
status codes:
- NotFoundError → 404
- NotMemberError / AlreadySubscribedError → 406

GET /list returns only the caller's lists. GET /list/{id} returns any
list to any authenticated caller.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.auth.dependencies import get_current_user_id
from todolist.db.engine import get_db
from todolist.schemas.list import (
    ListCreate,
    ListDelete,
    ListRead,
    ListResponse,
    ListsResponse,
    ListSubscribe,
    ListUpdate,
)
from todolist.services.errors import (
    AlreadySubscribedError,
    NotFoundError,
    NotMemberError,
)
from todolist.services.list_service import ListService

router = APIRouter(prefix="/list")


def _list_svc(db: AsyncSession = Depends(get_db)) -> ListService:
    return ListService(db)


def _respond(todo_list) -> ListResponse:
    return ListResponse(message=ListRead.model_validate(todo_list))


@router.post("", response_model=ListResponse)
async def create_list(
    body: ListCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ListService = Depends(_list_svc),
):
    """Create a list; the caller becomes its first subscriber."""
    try:
        todo_list = await svc.create_list(title=body.title, author_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _respond(todo_list)


@router.get("", response_model=ListsResponse)
async def get_lists(
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ListService = Depends(_list_svc),
):
    """All lists the caller subscribes to, with their tasks."""
    lists = await svc.lists_for_user(user_id)
    return ListsResponse(message=[ListRead.model_validate(lst) for lst in lists])


@router.put("", response_model=ListResponse)
async def update_list(
    body: ListUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ListService = Depends(_list_svc),
):
    """Rename a list (subscribers only)."""
    try:
        todo_list = await svc.update_title(body.id, body.title, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotMemberError as e:
        raise HTTPException(status_code=406, detail=str(e))
    return _respond(todo_list)


@router.delete("", response_model=ListResponse)
async def delete_list(
    body: ListDelete,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ListService = Depends(_list_svc),
):
    """Delete a list and its tasks (subscribers only). Returns the deleted list."""
    try:
        todo_list = await svc.delete_list(body.id, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotMemberError as e:
        raise HTTPException(status_code=406, detail=str(e))
    return _respond(todo_list)


@router.post("/subscribe", response_model=ListResponse)
async def subscribe(
    body: ListSubscribe,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ListService = Depends(_list_svc),
):
    """Add another user to a list the caller subscribes to."""
    try:
        todo_list = await svc.subscribe(
            list_id=body.list_id,
            new_member_id=body.user_id,
            user_id=user_id,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (NotMemberError, AlreadySubscribedError) as e:
        raise HTTPException(status_code=406, detail=str(e))
    return _respond(todo_list)


@router.get("/{list_id}", response_model=ListResponse)
async def get_list(
    list_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ListService = Depends(_list_svc),
):
    """Get a single list by ID."""
    try:
        lid = uuid.UUID(list_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="List not found")

    todo_list = await svc.get_list(lid)
    if not todo_list:
        raise HTTPException(status_code=404, detail="List not found")
    return _respond(todo_list)
