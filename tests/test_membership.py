"""Membership predicate tests against the service layer directly.

Learn: These bypass HTTP to pin down the authorization rules
themselves: subscription is checked per (user, list) pair, and
authorship is a plain comparison with task.author_id.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from todolist.db.models import Task, TodoList, User
from todolist.services.errors import (
    AlreadySubscribedError,
    NotAuthorError,
    NotFoundError,
    NotMemberError,
)
from todolist.services.list_service import ListService
from todolist.services.membership import (
    is_author,
    is_subscriber,
    require_author,
    require_subscriber,
)
from todolist.services.task_service import TaskService


@pytest_asyncio.fixture()
async def db(app):
    async with app.state.context.session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def users(db):
    alice = User(login="alice", password_hash="x")
    bob = User(login="bob", password_hash="x")
    db.add_all([alice, bob])
    await db.commit()
    return alice, bob


@pytest.mark.asyncio
async def test_creator_is_subscriber(db, users):
    alice, bob = users
    todo_list = await ListService(db).create_list("Groceries", alice.id)

    assert await is_subscriber(db, alice.id, todo_list.id) is True
    assert await is_subscriber(db, bob.id, todo_list.id) is False
    assert todo_list.subscriber_ids == [alice.id]


@pytest.mark.asyncio
async def test_is_subscriber_unknown_list(db, users):
    alice, _ = users
    assert await is_subscriber(db, alice.id, uuid.uuid4()) is False


@pytest.mark.asyncio
async def test_require_subscriber_raises_for_non_member(db, users):
    alice, bob = users
    todo_list = await ListService(db).create_list("Groceries", alice.id)

    await require_subscriber(db, alice.id, todo_list)
    with pytest.raises(NotMemberError):
        await require_subscriber(db, bob.id, todo_list)


@pytest.mark.asyncio
async def test_subscribe_grants_membership(db, users):
    alice, bob = users
    svc = ListService(db)
    todo_list = await svc.create_list("Groceries", alice.id)

    await svc.subscribe(todo_list.id, new_member_id=bob.id, user_id=alice.id)
    assert await is_subscriber(db, bob.id, todo_list.id) is True

    with pytest.raises(AlreadySubscribedError):
        await svc.subscribe(todo_list.id, new_member_id=bob.id, user_id=alice.id)


@pytest.mark.asyncio
async def test_subscribe_checks_list_before_user(db, users):
    alice, _ = users
    with pytest.raises(NotFoundError, match="List not found"):
        await ListService(db).subscribe(uuid.uuid4(), uuid.uuid4(), alice.id)


@pytest.mark.asyncio
async def test_author_predicate(db, users):
    alice, bob = users
    todo_list = await ListService(db).create_list("Groceries", alice.id)
    task = await TaskService(db).create_task(
        list_id=todo_list.id, title="Milk", body="2 litres", author_id=alice.id
    )

    assert is_author(task, alice.id) is True
    assert is_author(task, bob.id) is False
    require_author(task, alice.id)
    with pytest.raises(NotAuthorError):
        require_author(task, bob.id)


@pytest.mark.asyncio
async def test_task_default_deadline(db, users):
    alice, _ = users
    todo_list = await ListService(db).create_list("Groceries", alice.id)
    task = await TaskService(db).create_task(
        list_id=todo_list.id, title="Milk", body="2 litres", author_id=alice.id
    )
    expected = datetime.now(timezone.utc) + timedelta(hours=24)
    assert abs(task.deadline - expected) < timedelta(seconds=5)
    assert task.status == "ACTIVE"


@pytest.mark.asyncio
async def test_change_status_requires_membership(db, users):
    alice, bob = users
    todo_list = await ListService(db).create_list("Groceries", alice.id)
    svc = TaskService(db)
    task = await svc.create_task(
        list_id=todo_list.id, title="Milk", body="2 litres", author_id=alice.id
    )

    with pytest.raises(NotMemberError):
        await svc.change_status(task.id, "DONE", bob.id)

    updated = await svc.change_status(task.id, "DONE", alice.id)
    assert updated.status == "DONE"
