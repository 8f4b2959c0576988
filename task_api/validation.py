"""Validation rules for incoming create and update payloads.

The rules themselves live on the strict pydantic models in ``task_api.models``.
This module runs them and turns pydantic's errors into a flat list of
``FieldError`` values, one per offending field.
"""

from collections.abc import Mapping
from typing import Any

import pydantic

from task_api.errors import FieldError, ValidationError
from task_api.models import TaskCreate, TaskUpdate

# pydantic error type -> reason reported to the client
_REASONS = {
    "missing": "required",
    "blank": "required",
    "extra_forbidden": "unknown_field",
}

_EXPECTED = {
    "string_type": "a string",
    "bool_type": "a boolean",
}


def _field_error(error: Any) -> FieldError:
    loc = error["loc"]
    field = str(loc[0]) if loc else "body"
    kind = error["type"]
    reason = _REASONS.get(kind, "wrong_type")
    if reason == "required":
        message = f"{field} is required" if kind == "missing" else f"{field} must not be empty"
    elif reason == "unknown_field":
        message = f"{field} is not allowed"
    else:
        message = f"{field} must be {_EXPECTED.get(kind, 'a valid value')}"
    return FieldError(field=field, reason=reason, message=message)


def _not_an_object() -> list[FieldError]:
    return [FieldError(field="body", reason="wrong_type", message="body must be a JSON object")]


def _run(model: type[pydantic.BaseModel], payload: Any) -> tuple[Any, list[FieldError]]:
    if not isinstance(payload, Mapping):
        return None, _not_an_object()
    try:
        return model.model_validate(dict(payload)), []
    except pydantic.ValidationError as exc:
        errors: list[FieldError] = []
        seen: set[str] = set()
        for error in exc.errors():
            field_error = _field_error(error)
            # optional fields can report more than one failed union branch
            if field_error.field in seen:
                continue
            seen.add(field_error.field)
            errors.append(field_error)
        return None, errors


def validate_create(payload: Any) -> list[FieldError]:
    """Check a create payload. An empty list means it is valid."""
    return _run(TaskCreate, payload)[1]


def validate_update(payload: Any) -> list[FieldError]:
    """Check an update payload. A missing body counts as ``{}``."""
    return _run(TaskUpdate, {} if payload is None else payload)[1]


def parse_create(payload: Any) -> TaskCreate:
    data, errors = _run(TaskCreate, payload)
    if errors:
        raise ValidationError(errors)
    return data


def parse_update(payload: Any) -> TaskUpdate:
    data, errors = _run(TaskUpdate, {} if payload is None else payload)
    if errors:
        raise ValidationError(errors)
    return data
