import pytest

from users_api.entrypoints.schemas.user import PatchOperation
from users_api.services.patch import apply_patch
from users_api.services.validation import ModelErrors


@pytest.fixture
def document():
    return {"login": "johndoe", "firstName": "John", "lastName": "Doe"}


def _apply(document, *operations):
    errors = ModelErrors()
    result = apply_patch([PatchOperation(**operation) for operation in operations], document, errors)
    return result, errors.as_dict()


def test_replace_and_add_set_values(document):
    result, errors = _apply(
        document,
        {"op": "replace", "path": "/firstName", "value": "Jack"},
        {"op": "add", "path": "/lastName", "value": "Smith"},
    )

    assert errors == {}
    assert result == {"login": "johndoe", "firstName": "Jack", "lastName": "Smith"}
    assert document["firstName"] == "John"


def test_paths_match_case_insensitively(document):
    result, errors = _apply(document, {"op": "replace", "path": "/FIRSTNAME", "value": "Jack"})

    assert errors == {}
    assert result["firstName"] == "Jack"


def test_remove_clears_the_field(document):
    result, _ = _apply(document, {"op": "remove", "path": "/login"})
    assert result["login"] is None


def test_move_and_copy(document):
    copied, _ = _apply(document, {"op": "copy", "from": "/firstName", "path": "/lastName"})
    moved, _ = _apply(document, {"op": "move", "from": "/firstName", "path": "/login"})

    assert copied["lastName"] == "John"
    assert moved["login"] == "John"
    assert moved["firstName"] is None


def test_failed_test_operation_is_reported(document):
    result, errors = _apply(document, {"op": "test", "path": "/login", "value": "someoneelse"})

    assert result == document
    assert list(errors) == ["login"]


def test_errors_accumulate_and_valid_operations_still_apply(document):
    result, errors = _apply(
        document,
        {"op": "replace", "path": "/middleName", "value": "Q"},
        {"op": "frobnicate", "path": "/login", "value": "x"},
        {"op": "replace", "path": "/lastName", "value": "Roe"},
        {"op": "replace", "path": "/firstName", "value": {"nested": True}},
    )

    assert set(errors) == {"middleName", "login", "firstName"}
    assert result["lastName"] == "Roe"
    assert result["firstName"] == "John"


def test_nested_paths_are_not_found(document):
    _, errors = _apply(document, {"op": "replace", "path": "/login/first", "value": "x"})
    assert "first" in errors


def test_numbers_are_stored_as_strings(document):
    result, errors = _apply(document, {"op": "replace", "path": "/login", "value": 375})

    assert errors == {}
    assert result["login"] == "375"


def test_raw_operations_are_parsed_and_malformed_ones_reported(document):
    errors = ModelErrors()

    result = apply_patch(
        [{"op": "replace", "value": "x"}, "not an operation", {"op": "replace", "path": "/login", "value": "jack"}],
        document,
        errors,
    )

    assert result["login"] == "jack"
    assert set(errors.as_dict()) == {"path", "patch"}
