"""Error types raised by the service and translated to HTTP responses."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FieldError:
    """A single rejected field and the reason it was rejected."""

    field: str
    reason: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class TaskApiError(Exception):
    """Base class for all errors the API knows how to report."""

    status_code = 500

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(TaskApiError):
    """The request payload was rejected before any persistence happened."""

    status_code = 400

    def __init__(self, errors: list[FieldError]) -> None:
        message = errors[0].message if errors else "Invalid request"
        super().__init__(message, list(errors))


class MalformedInputError(ValidationError):
    """The request could not be parsed (non-integer id, non-JSON body)."""


class NotFoundError(TaskApiError):
    """No task exists with the requested id."""

    status_code = 404

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id


class StoreError(TaskApiError):
    """The underlying store failed. Details are logged, never returned."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__("Internal server error")
        self.detail = detail
