"""
FastAPI dependencies that assemble the per-request object graph.

Nothing here holds state: each request gets its own repository bound to the
request's session, a service wrapping that repository, and an auth context
resolved from the ``Authorization`` header.  FastAPI caches ``get_db`` per
request, so all of them share one session / transaction.

Usage in a router::

    @router.get("/todos")
    async def list_todos(service: TodoService = Depends(get_todo_service)):
        ...
"""
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import AuthContext, resolve_auth_context
from app.database import get_db
from app.repositories.todo_repository import SqlAlchemyTodoRepository, TodoRepository
from app.services.todo_service import TodoService


def get_todo_repository(db: AsyncSession = Depends(get_db)) -> TodoRepository:
    return SqlAlchemyTodoRepository(db)


def get_todo_service(
    todo_repository: TodoRepository = Depends(get_todo_repository),
) -> TodoService:
    return TodoService(todo_repository)


async def get_auth_context(
    authorization: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> AuthContext:
    return await resolve_auth_context(db, authorization)
