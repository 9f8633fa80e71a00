"""
Todo repository: persistence contract and SQLAlchemy implementation.

Every read except ``find_all`` is filtered by owner inside the SQL query;
callers never receive another user's rows and then filter them out.
"""
import uuid
from typing import Protocol, Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Todo


class TodoRepository(Protocol):
    """Persistence interface for Todo entities."""

    async def save(self, todo: Todo) -> Todo:
        """Insert or update *todo* and return the stored entity."""
        ...

    async def find_all(self) -> Sequence[Todo]:
        """Return every todo in the store, regardless of owner."""
        ...

    async def find_all_by_user_id(self, user_id: uuid.UUID) -> Sequence[Todo]:
        """Return all todos owned by *user_id*."""
        ...

    async def find_by_keyword(self, user_id: uuid.UUID, keyword: str) -> Sequence[Todo]:
        """Return todos owned by *user_id* whose title or description contains *keyword*."""
        ...

    async def find_by_user_id_and_id(self, user_id: uuid.UUID, todo_id: uuid.UUID) -> Todo | None:
        """Return the todo *todo_id* if it exists and is owned by *user_id*."""
        ...

    async def delete_by_id(self, todo_id: uuid.UUID) -> None:
        """Hard-delete the todo *todo_id*."""
        ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyTodoRepository:
    """TodoRepository backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def save(self, todo: Todo) -> Todo:
        self._db.add(todo)
        await self._db.flush()
        # Load server-side defaults (created_at / updated_at) without lazy IO later.
        await self._db.refresh(todo)
        return todo

    async def find_all(self) -> Sequence[Todo]:
        result = await self._db.execute(select(Todo).order_by(Todo.created_at, Todo.id))
        return result.scalars().all()

    async def find_all_by_user_id(self, user_id: uuid.UUID) -> Sequence[Todo]:
        q = select(Todo).where(Todo.user_id == user_id).order_by(Todo.created_at, Todo.id)
        result = await self._db.execute(q)
        return result.scalars().all()

    async def find_by_keyword(self, user_id: uuid.UUID, keyword: str) -> Sequence[Todo]:
        pattern = f"%{_escape_like(keyword)}%"
        q = (
            select(Todo)
            .where(
                Todo.user_id == user_id,
                or_(
                    Todo.title.ilike(pattern, escape="\\"),
                    Todo.description.ilike(pattern, escape="\\"),
                ),
            )
            .order_by(Todo.created_at, Todo.id)
        )
        result = await self._db.execute(q)
        return result.scalars().all()

    async def find_by_user_id_and_id(self, user_id: uuid.UUID, todo_id: uuid.UUID) -> Todo | None:
        q = select(Todo).where(Todo.user_id == user_id, Todo.id == todo_id)
        result = await self._db.execute(q)
        return result.scalar_one_or_none()

    async def delete_by_id(self, todo_id: uuid.UUID) -> None:
        await self._db.execute(delete(Todo).where(Todo.id == todo_id))
        await self._db.flush()
