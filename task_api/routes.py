"""HTTP routes for the task resource."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from task_api.models import TaskEnvelope, TaskListEnvelope
from task_api.service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def get_service(request: Request) -> TaskService:
    return request.app.state.service


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: Any = Body(default=None),
    service: TaskService = Depends(get_service),
) -> TaskEnvelope:
    """Create a new task."""
    task = service.create(payload)
    return TaskEnvelope(message="Task created successfully", data=task)


@router.get("", response_model=TaskListEnvelope)
def list_tasks(service: TaskService = Depends(get_service)) -> TaskListEnvelope:
    """List all tasks, newest first."""
    tasks = service.find_all()
    return TaskListEnvelope(message="Tasks found", data=tasks, total=len(tasks))


@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(task_id: int, service: TaskService = Depends(get_service)) -> TaskEnvelope:
    """Get a specific task by ID."""
    return TaskEnvelope(message="Task found", data=service.find_one(task_id))


@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: int,
    payload: Any = Body(default=None),
    service: TaskService = Depends(get_service),
) -> TaskEnvelope:
    """Update an existing task."""
    task = service.update(task_id, payload)
    return TaskEnvelope(message="Task updated successfully", data=task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, service: TaskService = Depends(get_service)) -> None:
    """Delete a task."""
    service.remove(task_id)
