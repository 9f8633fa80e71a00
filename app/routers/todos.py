import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.auth import AuthContext
from app.dependencies import get_auth_context, get_todo_service
from app.models import Todo
from app.schemas import ApiResponse, TodoRequest, TodoResponse
from app.services.todo_service import TodoService


def _respond(status_code: int, body: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _todo_to_dict(todo: Todo) -> dict:
    return TodoResponse.model_validate(todo).model_dump(mode="json")


def _forbidden() -> JSONResponse:
    return _respond(403, ApiResponse.fail("User is not authenticated"))


def _not_found() -> JSONResponse:
    return _respond(404, ApiResponse.fail("Todo not found"))


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TodoController:
    """
    HTTP adapter for the todo service.

    Validates request bodies, checks authentication, delegates to the
    service and wraps every outcome in an ``ApiResponse`` envelope.
    Validation happens before the auth context is consulted, so a bad
    body never reaches the auth collaborator or the service.
    """

    def __init__(self, todo_service: TodoService, auth_context: AuthContext) -> None:
        self.todo_service = todo_service
        self.auth_context = auth_context

    @staticmethod
    def _validate(data: TodoRequest, require_finished: bool) -> str | None:
        if _is_blank(data.title):
            return "Title is required"
        if _is_blank(data.description):
            return "Description is required"
        if require_finished and data.finished is None:
            return "Finished status is required"
        return None

    async def create_todo(self, data: TodoRequest) -> JSONResponse:
        error = self._validate(data, require_finished=False)
        if error:
            return _respond(400, ApiResponse.fail(error))
        if not self.auth_context.is_authenticated():
            return _forbidden()

        user = self.auth_context.get_auth_user()
        todo = await self.todo_service.create_todo(user.id, data.title, data.description)
        return _respond(200, ApiResponse.success("Todo created", {"id": str(todo.id)}))

    async def get_all_todos(self, search: str | None = None) -> JSONResponse:
        if not self.auth_context.is_authenticated():
            return _forbidden()

        user = self.auth_context.get_auth_user()
        todos = await self.todo_service.get_all_todos(user.id, search)
        return _respond(
            200,
            ApiResponse.success("Todos retrieved", {"todos": [_todo_to_dict(t) for t in todos]}),
        )

    async def get_todo_by_id(self, todo_id: uuid.UUID) -> JSONResponse:
        if not self.auth_context.is_authenticated():
            return _forbidden()

        user = self.auth_context.get_auth_user()
        todo = await self.todo_service.get_todo_by_id(user.id, todo_id)
        if todo is None:
            return _not_found()
        return _respond(200, ApiResponse.success("Todo retrieved", {"todo": _todo_to_dict(todo)}))

    async def update_todo(self, todo_id: uuid.UUID, data: TodoRequest) -> JSONResponse:
        error = self._validate(data, require_finished=True)
        if error:
            return _respond(400, ApiResponse.fail(error))
        if not self.auth_context.is_authenticated():
            return _forbidden()

        user = self.auth_context.get_auth_user()
        todo = await self.todo_service.update_todo(
            user.id, todo_id, data.title, data.description, data.finished
        )
        if todo is None:
            return _not_found()
        return _respond(200, ApiResponse.success("Todo updated", _todo_to_dict(todo)))

    async def delete_todo(self, todo_id: uuid.UUID) -> JSONResponse:
        if not self.auth_context.is_authenticated():
            return _forbidden()

        user = self.auth_context.get_auth_user()
        deleted = await self.todo_service.delete_todo(user.id, todo_id)
        if not deleted:
            return _not_found()
        return _respond(200, ApiResponse.success("Todo deleted"))


def get_todo_controller(
    todo_service: TodoService = Depends(get_todo_service),
    auth_context: AuthContext = Depends(get_auth_context),
) -> TodoController:
    return TodoController(todo_service, auth_context)


router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=ApiResponse)
async def create_todo(data: TodoRequest, controller: TodoController = Depends(get_todo_controller)):
    return await controller.create_todo(data)


@router.get("", response_model=ApiResponse)
async def get_all_todos(
    search: str | None = None,
    controller: TodoController = Depends(get_todo_controller),
):
    return await controller.get_all_todos(search)


@router.get("/{todo_id}", response_model=ApiResponse)
async def get_todo(todo_id: uuid.UUID, controller: TodoController = Depends(get_todo_controller)):
    return await controller.get_todo_by_id(todo_id)


@router.put("/{todo_id}", response_model=ApiResponse)
async def update_todo(
    todo_id: uuid.UUID,
    data: TodoRequest,
    controller: TodoController = Depends(get_todo_controller),
):
    return await controller.update_todo(todo_id, data)


@router.delete("/{todo_id}", response_model=ApiResponse)
async def delete_todo(todo_id: uuid.UUID, controller: TodoController = Depends(get_todo_controller)):
    return await controller.delete_todo(todo_id)
