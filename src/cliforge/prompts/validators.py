"""Built-in validation rules and whole-answer-set validation."""

from __future__ import annotations

import re
from typing import Any

from cliforge.prompts.base import AnswerSet, ValidationRule

_PROJECT_NAME_RE = re.compile(r"^[a-zA-Z0-9\-_]+$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _required(value: Any, answers: AnswerSet | None = None) -> bool:
    return value is not None and str(value).strip() != ""


def _project_name(value: Any, answers: AnswerSet | None = None) -> bool | str:
    if value is None or str(value).strip() == "":
        return "Project name cannot be empty"
    name = str(value)
    if not _PROJECT_NAME_RE.match(name):
        return "Project name can only contain letters, numbers, hyphens, and underscores"
    if name.startswith("-") or name.endswith("-"):
        return "Project name cannot start or end with a hyphen"
    return True


def _email(value: Any, answers: AnswerSet | None = None) -> bool | str:
    if _EMAIL_RE.match(str(value or "")):
        return True
    return "Please enter a valid email address"


required = ValidationRule(_required, message="This field is required")
project_name = ValidationRule(_project_name)
email = ValidationRule(_email)


def min_length(minimum: int) -> ValidationRule:
    """Rule rejecting values shorter than minimum characters."""

    def _validate(value: Any, answers: AnswerSet | None = None) -> bool | str:
        return len(str(value or "")) >= minimum or f"Minimum length is {minimum} characters"

    return ValidationRule(_validate)


def max_length(maximum: int) -> ValidationRule:
    """Rule rejecting values longer than maximum characters."""

    def _validate(value: Any, answers: AnswerSet | None = None) -> bool | str:
        return len(str(value or "")) <= maximum or f"Maximum length is {maximum} characters"

    return ValidationRule(_validate)


class ValidationManager:
    """Validate a finished answer set before generation.

    Custom validators are keyed by answer name and run against that answer
    when it is present.
    """

    def __init__(
        self, custom_validators: dict[str, ValidationRule] | None = None
    ) -> None:
        self.custom_validators = dict(custom_validators or {})

    def add_validators(self, validators: dict[str, ValidationRule]) -> None:
        """Register additional validators; existing names are replaced."""
        self.custom_validators.update(validators)

    def get_validator(self, name: str) -> ValidationRule | None:
        return self.custom_validators.get(name)

    def validate_answers(self, answers: AnswerSet) -> tuple[bool, str | None]:
        """Return (valid, message) for a resolved answer set."""
        if not answers.get("project_name"):
            return False, "Project name is required"
        if not answers.get("template"):
            return False, "Template selection is required"

        for name, rule in self.custom_validators.items():
            if name not in answers:
                continue
            error = rule.check(answers[name], answers)
            if error is not None:
                return False, error

        return True, None
