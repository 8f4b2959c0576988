"""Business rules for creating, reading, updating and deleting tasks."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from task_api.errors import NotFoundError
from task_api.models import NewTask, Task
from task_api.store import TaskStore
from task_api.validation import parse_create, parse_update

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC)


class TaskService:
    """Validates payloads and applies them to a ``TaskStore``.

    Every payload is validated before the store is touched, so a rejected
    request never has a side effect.
    """

    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self.clock = clock

    def create(self, payload: Any) -> Task:
        data = parse_create(payload)
        now = self.clock()
        task = self.store.insert(
            NewTask(
                title=data.title,
                description=data.description,
                completed=False,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Created task %s", task.id)
        return task

    def find_all(self) -> list[Task]:
        return self.store.list_all()

    def find_one(self, task_id: int) -> Task:
        task = self.store.get(task_id)
        if task is None:
            logger.debug("Task %s not found", task_id)
            raise NotFoundError(task_id)
        return task

    def update(self, task_id: int, payload: Any) -> Task:
        """Apply a partial update. Fields missing from the payload are kept."""
        changes = parse_update(payload)
        task = self.find_one(task_id)

        sent = changes.model_fields_set
        if "title" in sent:
            task.title = changes.title
        if "description" in sent:
            task.description = changes.description
        if "completed" in sent:
            task.completed = changes.completed
        # refreshed even when nothing changed; never before created_at
        task.updated_at = max(self.clock(), task.created_at)

        task = self.store.replace(task)
        logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(sent)) or "no fields")
        return task

    def remove(self, task_id: int) -> None:
        task = self.find_one(task_id)
        self.store.delete(task)
        logger.info("Deleted task %s", task_id)
