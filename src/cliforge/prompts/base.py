"""Prompt definitions and validation rules."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

AnswerSet = dict[str, Any]


class PromptKind(Enum):
    """Kinds of prompts the engine can ask."""

    INPUT = "input"
    SELECT = "select"
    CONFIRM = "confirm"
    MULTISELECT = "multiselect"


@dataclass(frozen=True)
class ValidationRule:
    """A predicate over a prompt value.

    ``validate(value, answers)`` returns True when the value is acceptable,
    otherwise an error message (or any other falsy value, in which case
    ``message`` is shown).
    """

    validate: Callable[[Any, AnswerSet], bool | str]
    message: str | None = None

    def check(self, value: Any, answers: AnswerSet) -> str | None:
        """Run the rule. Returns None on success, the error message otherwise."""
        result = self.validate(value, answers)
        if result is True:
            return None
        if isinstance(result, str) and result:
            return result
        return self.message or "Invalid input"


@dataclass(frozen=True)
class Choice:
    """One option of a select or multiselect prompt."""

    label: str
    value: Any
    description: str | None = None


@dataclass(frozen=True)
class PromptDefinition:
    """A single question asked by the prompt engine."""

    name: str
    kind: PromptKind
    message: str
    default: Any = None
    choices: tuple[Choice, ...] = ()
    validate: ValidationRule | None = None
    when: Callable[[AnswerSet], bool] | None = None  # visibility predicate
    transform: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, PromptKind):
            object.__setattr__(self, "kind", PromptKind(self.kind))
        if not isinstance(self.choices, tuple):
            object.__setattr__(self, "choices", tuple(self.choices))

    @property
    def needs_choices(self) -> bool:
        return self.kind in (PromptKind.SELECT, PromptKind.MULTISELECT)

    def is_visible(self, answers: AnswerSet) -> bool:
        """Evaluate the visibility predicate against answers so far."""
        return self.when is None or bool(self.when(answers))
