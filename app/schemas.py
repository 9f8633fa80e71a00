import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.models import TITLE_MAX_LENGTH


# --- Todo ---

class TodoRequest(BaseModel):
    """
    Body of ``POST /todos`` and ``PUT /todos/{id}``.

    Every field is optional at the schema level so that missing or empty
    values reach the controller, which answers them with a 400 envelope.
    A title longer than the column fails here, before the controller runs.
    """
    title: str | None = Field(None, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    finished: bool | None = None


class TodoResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    finished: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Envelope ---

class ApiResponse(BaseModel):
    status: Literal["success", "fail"]
    message: str
    data: Any = None

    @classmethod
    def success(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(status="success", message=message, data=data)

    @classmethod
    def fail(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(status="fail", message=message, data=data)
