from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from pydantic import ValidationError

from users_api.entrypoints.schemas.user import PatchOperation
from users_api.services.validation import ModelErrors

_MISSING = object()


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def _resolve(document: Dict[str, Any], path: Optional[str]) -> Tuple[str, Optional[str]]:
    """Map a JSON pointer onto a top-level key of ``document``.

    Returns the last path segment together with the matching key, or ``None``
    for the key when the pointer does not address a field. Property names are
    matched case-insensitively.
    """
    if not path or not path.startswith("/"):
        return path or "", None
    segments = [_unescape(segment) for segment in path[1:].split("/")]
    if len(segments) != 1:
        return segments[-1], None
    segment = segments[0]
    for key in document:
        if key.lower() == segment.lower():
            return segment, key
    return segment, None


def _coerce(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return _MISSING


def _not_found(segment: str) -> str:
    return f"The target location specified by path segment '{segment}' was not found."


def _invalid_value(value: Any) -> str:
    return f"The value '{value}' is invalid for target location."


def _parse_operation(raw: Any, errors: ModelErrors) -> Optional[PatchOperation]:
    try:
        return PatchOperation.model_validate(raw)
    except ValidationError as exc:
        for error in exc.errors():
            location = error.get("loc", ())
            errors.add(str(location[-1]) if location else "patch", error.get("msg", "Invalid operation"))
        return None


def apply_patch(
    operations: Sequence[Any],
    document: Dict[str, Any],
    errors: ModelErrors,
) -> Dict[str, Any]:
    """Apply raw JSON Patch operations to a flat projection.

    Every operation is attempted; failures are recorded in ``errors`` under the
    addressed path segment and leave the projection untouched for that
    operation.
    """
    result = dict(document)
    for raw in operations:
        operation = _parse_operation(raw, errors)
        if operation is None:
            continue
        op = (operation.op or "").lower()
        segment, key = _resolve(result, operation.path)

        if op not in ("add", "replace", "remove", "test", "move", "copy"):
            errors.add(segment or "patch", f"Invalid JsonPatch operation '{operation.op}'.")
            continue
        if key is None:
            errors.add(segment or "patch", _not_found(segment))
            continue

        if op == "remove":
            result[key] = None
            continue

        if op in ("move", "copy"):
            from_segment, from_key = _resolve(result, operation.from_)
            if from_key is None:
                errors.add(from_segment or "patch", _not_found(from_segment))
                continue
            value = result[from_key]
            if op == "move":
                result[from_key] = None
            result[key] = value
            continue

        value = _coerce(operation.value)
        if value is _MISSING:
            errors.add(segment, _invalid_value(operation.value))
            continue
        if op == "test":
            if result[key] != value:
                errors.add(
                    segment,
                    f"The current value '{result[key]}' at path '{segment}' is not equal to the test value '{value}'.",
                )
            continue
        result[key] = value
    return result
