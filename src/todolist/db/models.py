"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Relationships, constraints, and indexes defined here.
Alembic migrations mirror these models.

Key concepts:
- UUID primary keys (generic Uuid type, native on PostgreSQL, CHAR(32) on SQLite)
- list_subscribers association table: composite primary key, so the database
  rejects a second membership row for the same (list, user) pair
- Python-side defaults for timestamps so freshly created rows serialize
  without a refresh round-trip
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


TASK_STATUSES = ("ACTIVE", "DONE", "CLOSED", "IN_PROGRESS")


# Many-to-many: which users are members (subscribers) of which lists.
list_subscribers = Table(
    "list_subscribers",
    Base.metadata,
    Column(
        "list_id",
        Uuid,
        ForeignKey("lists.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class User(Base):
    """A registered user. Logs in with login + password."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    login: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # Relationships
    lists: Mapped[list["TodoList"]] = relationship(
        secondary=list_subscribers, back_populates="subscribers"
    )


class TodoList(Base):
    """A shared to-do list.

    Learn: Membership, not ownership, governs lists. author_id records who
    created the list, but every subscriber may rename, delete, or invite
    others. The author is added to subscribers on creation.
    """

    __tablename__ = "lists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # Relationships
    subscribers: Mapped[list["User"]] = relationship(
        secondary=list_subscribers, back_populates="lists"
    )
    tasks: Mapped[list["Task"]] = relationship(
        back_populates="todo_list",
        cascade="all, delete-orphan",
        order_by="Task.created_at",
    )

    @property
    def subscriber_ids(self) -> list[uuid.UUID]:
        return [u.id for u in self.subscribers]


class Task(Base):
    """A task inside a list.

    Learn: Any subscriber of the parent list can change a task's status,
    but only its author may delete it.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_list_id", "list_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(String(500), nullable=False)
    list_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("lists.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="ACTIVE"
    )  # one of TASK_STATUSES
    deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    # Relationships
    todo_list: Mapped["TodoList"] = relationship(back_populates="tasks")
