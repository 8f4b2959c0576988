"""Pydantic models for the Task API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

API_VERSION = "1.0.0"


class TaskCreate(BaseModel):
    """Request body for creating a new task."""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str = Field(..., description="The task title (required, not blank)")
    description: str | None = Field(default=None, description="Optional free-form description")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("blank", "title must not be empty")
        return value


class TaskUpdate(BaseModel):
    """Request body for updating an existing task.

    Only the fields actually sent are applied; see ``model_fields_set``.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str | None = Field(default=None, description="New title for the task")
    description: str | None = Field(default=None, description="New description, null clears it")
    completed: bool | None = Field(default=None, description="New completion status")

    @field_validator("title", "completed")
    @classmethod
    def not_null(cls, value: Any, info: ValidationInfo) -> Any:
        # only description may be sent as null
        if value is None:
            kind = "string_type" if info.field_name == "title" else "bool_type"
            raise PydanticCustomError(kind, "{field} may not be null", {"field": info.field_name})
        return value


class NewTask(BaseModel):
    """A task that has not been stored yet and has no id."""

    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., description="The task title")
    description: str | None = Field(default=None, description="The task description")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    created_at: datetime = Field(..., description="When the task was created")
    updated_at: datetime = Field(..., description="When the task was last updated")


class Task(NewTask):
    """A task item in the task manager."""

    id: int = Field(..., description="Unique identifier for the task")


class TaskEnvelope(BaseModel):
    """Success body wrapping a single task."""

    message: str
    data: Task


class TaskListEnvelope(BaseModel):
    """Success body wrapping every task."""

    message: str
    data: list[Task]
    total: int


class ErrorEnvelope(BaseModel):
    """Body returned for every failed request."""

    success: bool = False
    statusCode: int
    message: str
    errors: list[dict[str, Any]] | None = None
    timestamp: datetime


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = API_VERSION
