"""
Todo service: business logic for the Todo aggregate.

Design notes
------------
- Every lookup goes through an owner-scoped repository query.  A todo
  that does not exist and a todo owned by someone else are the same
  thing to the caller: ``None`` (or ``False`` for delete).
- Input validation (non-empty title / description) is the controller's
  job; the service trusts its arguments.
- The repository is injected through the constructor, so tests can pass
  any object implementing ``TodoRepository``.
"""
import logging
import uuid
from typing import Sequence

from app.models import Todo
from app.repositories.todo_repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, todo_repository: TodoRepository) -> None:
        self._todos = todo_repository

    async def create_todo(self, user_id: uuid.UUID, title: str, description: str) -> Todo:
        """Create an unfinished todo owned by *user_id* and return the stored entity."""
        todo = Todo(user_id=user_id, title=title, description=description, finished=False)
        saved = await self._todos.save(todo)
        logger.debug("Created todo %s for user %s", saved.id, user_id)
        return saved

    async def get_all_todos(self, user_id: uuid.UUID, keyword: str | None = None) -> Sequence[Todo]:
        """
        Return the todos owned by *user_id*.

        When *keyword* is given (and not blank) only todos whose title or
        description contains it are returned.
        """
        if keyword is None or not keyword.strip():
            return await self._todos.find_all_by_user_id(user_id)
        return await self._todos.find_by_keyword(user_id, keyword.strip())

    async def get_todo_by_id(self, user_id: uuid.UUID, todo_id: uuid.UUID) -> Todo | None:
        return await self._todos.find_by_user_id_and_id(user_id, todo_id)

    async def update_todo(
        self,
        user_id: uuid.UUID,
        todo_id: uuid.UUID,
        title: str | None = None,
        description: str | None = None,
        finished: bool | None = None,
    ) -> Todo | None:
        """
        Apply the supplied fields to the todo and return it.

        Fields passed as None are left unchanged.  Returns None when the
        todo does not exist or is not owned by *user_id*.
        """
        todo = await self._todos.find_by_user_id_and_id(user_id, todo_id)
        if todo is None:
            return None

        if title is not None:
            todo.title = title
        if description is not None:
            todo.description = description
        if finished is not None:
            todo.finished = finished

        saved = await self._todos.save(todo)
        logger.debug("Updated todo %s for user %s", todo_id, user_id)
        return saved

    async def delete_todo(self, user_id: uuid.UUID, todo_id: uuid.UUID) -> bool:
        """Delete the todo; False when it does not exist or is not owned by *user_id*."""
        todo = await self._todos.find_by_user_id_and_id(user_id, todo_id)
        if todo is None:
            return False

        await self._todos.delete_by_id(todo_id)
        logger.debug("Deleted todo %s for user %s", todo_id, user_id)
        return True
