from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

LOGIN_CHARSET_MESSAGE = "Login should contain only letters or digits"


class ValidationFailed(Exception):
    def __init__(self, errors: Dict[str, List[str]]) -> None:
        super().__init__(f"validation failed for {', '.join(errors)}")
        self.errors = errors


class ModelErrors:
    """Ordered accumulator of field-level messages."""

    def __init__(self) -> None:
        self._errors: Dict[str, List[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, []).append(message)

    @property
    def is_valid(self) -> bool:
        return not self._errors

    def as_dict(self) -> Dict[str, List[str]]:
        return {field: list(messages) for field, messages in self._errors.items()}

    def raise_if_invalid(self) -> None:
        if not self.is_valid:
            raise ValidationFailed(self.as_dict())


@dataclass(frozen=True)
class Rule:
    attribute: str
    message: str
    check: Callable[[Any], bool]

    @property
    def field(self) -> str:
        return to_camel(self.attribute)


def is_present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def is_letters_or_digits(value: Optional[str]) -> bool:
    # Unicode letters and decimal digits count, not only ASCII ones
    if value is None:
        return True
    return all(char.isalpha() or char.isdecimal() for char in value)


def required(attribute: str, display_name: str) -> Rule:
    return Rule(attribute, f"The {display_name} field is required.", is_present)


CREATE_RULES = (
    required("login", "Login"),
    Rule("login", LOGIN_CHARSET_MESSAGE, is_letters_or_digits),
)

UPSERT_RULES = (
    required("login", "Login"),
    required("first_name", "FirstName"),
    required("last_name", "LastName"),
)

PATCHED_USER_RULES = (
    Rule("login", "Login should not be empty", is_present),
    Rule("login", LOGIN_CHARSET_MESSAGE, is_letters_or_digits),
    Rule("first_name", "First name should not be empty", is_present),
    Rule("last_name", "Last name should not be empty", is_present),
)


def evaluate(model: BaseModel, rules: Iterable[Rule], errors: Optional[ModelErrors] = None) -> ModelErrors:
    errors = errors if errors is not None else ModelErrors()
    for rule in rules:
        if not rule.check(getattr(model, rule.attribute)):
            errors.add(rule.field, rule.message)
    return errors
