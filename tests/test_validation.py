"""Tests for the create/update validation rules."""

import pytest

from task_api.errors import ValidationError
from task_api.validation import parse_update, validate_create, validate_update


def reasons(errors) -> dict[str, str]:
    return {e.field: e.reason for e in errors}


def test_create_accepts_title_only() -> None:
    assert validate_create({"title": "Buy milk"}) == []


def test_create_accepts_title_and_description() -> None:
    assert validate_create({"title": "Buy milk", "description": "two litres"}) == []


def test_create_accepts_null_description() -> None:
    assert validate_create({"title": "Buy milk", "description": None}) == []


def test_create_missing_title() -> None:
    errors = validate_create({"description": "no title"})
    assert reasons(errors) == {"title": "required"}
    assert errors[0].message == "title is required"


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_create_blank_title(title: str) -> None:
    assert reasons(validate_create({"title": title})) == {"title": "required"}


@pytest.mark.parametrize("title", [123, None, True, ["a"], {"a": 1}])
def test_create_title_wrong_type(title) -> None:
    assert reasons(validate_create({"title": title})) == {"title": "wrong_type"}


def test_create_description_wrong_type() -> None:
    errors = validate_create({"title": "ok", "description": 5})
    assert reasons(errors) == {"description": "wrong_type"}
    assert errors[0].message == "description must be a string"


def test_create_rejects_unknown_fields() -> None:
    errors = validate_create({"title": "ok", "completed": True, "priority": "high"})
    assert reasons(errors) == {"completed": "unknown_field", "priority": "unknown_field"}


@pytest.mark.parametrize("payload", [None, [], "title", 42])
def test_create_requires_an_object(payload) -> None:
    assert reasons(validate_create(payload)) == {"body": "wrong_type"}


def test_update_accepts_empty_payload() -> None:
    assert validate_update({}) == []
    assert validate_update(None) == []


def test_update_allows_empty_strings() -> None:
    assert validate_update({"title": "", "description": ""}) == []


def test_update_collects_every_violation() -> None:
    errors = validate_update({"title": 123, "description": False, "completed": "invalid"})
    assert reasons(errors) == {
        "title": "wrong_type",
        "description": "wrong_type",
        "completed": "wrong_type",
    }


@pytest.mark.parametrize("completed", [1, 0, "true", None])
def test_update_completed_must_be_boolean(completed) -> None:
    assert reasons(validate_update({"completed": completed})) == {"completed": "wrong_type"}


def test_update_title_may_not_be_null() -> None:
    errors = validate_update({"title": None})
    assert reasons(errors) == {"title": "wrong_type"}
    assert errors[0].message == "title must be a string"


def test_update_dump_only_has_sent_fields() -> None:
    changes = parse_update({"description": None})
    assert changes.model_dump(exclude_unset=True) == {"description": None}
    assert changes.title is None
    assert changes.completed is None


def test_update_rejects_unknown_fields() -> None:
    assert reasons(validate_update({"id": 7})) == {"id": "unknown_field"}


def test_parse_update_tracks_sent_fields() -> None:
    changes = parse_update({"completed": True})
    assert changes.model_fields_set == {"completed"}
    assert changes.completed is True


def test_parse_update_raises_with_all_errors() -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_update({"title": 1, "completed": "no"})
    assert {e.field for e in exc_info.value.errors} == {"title", "completed"}
    assert exc_info.value.status_code == 400
