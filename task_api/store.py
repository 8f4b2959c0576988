"""Task storage backends.

``SqlTaskStore`` is the real one. ``InMemoryTaskStore`` keeps everything in a
dict and is handy for tests or running the API without a database.
"""

import itertools
import logging
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy import Engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from task_api.database import Base, TaskRow
from task_api.errors import NotFoundError, StoreError
from task_api.models import NewTask, Task

logger = logging.getLogger(__name__)

# SQL INTEGER primary keys are signed 64-bit
MAX_ROW_ID = 2**63 - 1


class TaskStore(Protocol):
    def insert(self, new_task: NewTask) -> Task: ...

    def list_all(self) -> list[Task]: ...

    def get(self, task_id: int) -> Task | None: ...

    def replace(self, task: Task) -> Task: ...

    def delete(self, task: Task) -> None: ...

    def clear(self) -> None: ...


def _newest_first(task: Task) -> tuple[datetime, int]:
    return task.created_at, task.id


class InMemoryTaskStore:
    """Simple in-memory task storage."""

    def __init__(self) -> None:
        """Initialize an empty task store."""
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)

    def insert(self, new_task: NewTask) -> Task:
        task = Task(id=next(self._ids), **new_task.model_dump())
        self._tasks[task.id] = task
        return task.model_copy()

    def list_all(self) -> list[Task]:
        """Return all tasks, newest first. Equal timestamps fall back to id."""
        tasks = sorted(self._tasks.values(), key=_newest_first, reverse=True)
        return [task.model_copy() for task in tasks]

    def get(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return None if task is None else task.model_copy()

    def replace(self, task: Task) -> Task:
        self._tasks[task.id] = task.model_copy()
        return task

    def delete(self, task: Task) -> None:
        self._tasks.pop(task.id, None)

    def clear(self) -> None:
        """Clear all tasks. Ids handed out so far are never reused."""
        self._tasks.clear()


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on the way back
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _to_task(row: TaskRow) -> Task:
    task = Task.model_validate(row)
    task.created_at = _as_utc(task.created_at)
    task.updated_at = _as_utc(task.updated_at)
    return task


class SqlTaskStore:
    """Task storage on top of a SQLAlchemy engine.

    Every call runs in its own session and commits before returning, so a
    caller sees one result or one ``StoreError`` per call.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed("create schema", exc) from exc

    def _failed(self, action: str, exc: Exception) -> StoreError:
        logger.error("Task store failed to %s: %s", action, exc)
        return StoreError(f"{action}: {exc}")

    def insert(self, new_task: NewTask) -> Task:
        row = TaskRow(**new_task.model_dump())
        try:
            with self._sessions() as session, session.begin():
                session.add(row)
            return _to_task(row)
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed("insert task", exc) from exc

    def list_all(self) -> list[Task]:
        query = select(TaskRow).order_by(TaskRow.created_at.desc(), TaskRow.id.desc())
        try:
            with self._sessions() as session:
                return [_to_task(row) for row in session.scalars(query)]
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed("list tasks", exc) from exc

    def get(self, task_id: int) -> Task | None:
        if not 1 <= task_id <= MAX_ROW_ID:
            return None
        try:
            with self._sessions() as session:
                row = session.get(TaskRow, task_id)
                return None if row is None else _to_task(row)
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed(f"load task {task_id}", exc) from exc

    def replace(self, task: Task) -> Task:
        try:
            with self._sessions() as session, session.begin():
                row = session.get(TaskRow, task.id)
                if row is None:
                    raise NotFoundError(task.id)
                row.title = task.title
                row.description = task.description
                row.completed = task.completed
                row.updated_at = task.updated_at
            return _to_task(row)
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed(f"save task {task.id}", exc) from exc

    def delete(self, task: Task) -> None:
        try:
            with self._sessions() as session, session.begin():
                session.execute(delete(TaskRow).where(TaskRow.id == task.id))
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed(f"delete task {task.id}", exc) from exc

    def clear(self) -> None:
        try:
            with self._sessions() as session, session.begin():
                session.execute(delete(TaskRow))
        except (SQLAlchemyError, OverflowError) as exc:
            raise self._failed("clear tasks", exc) from exc
