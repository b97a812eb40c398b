"""Prompt definitions, validation rules and the prompt resolution engine."""

from cliforge.prompts import validators
from cliforge.prompts.base import (
    AnswerSet,
    Choice,
    PromptDefinition,
    PromptKind,
    ValidationRule,
)
from cliforge.prompts.engine import PromptEngine, fill_defaults
from cliforge.prompts.reader import (
    DEFAULT_READLINE_MODE,
    READLINE_MODES,
    LineReader,
    LineSource,
    ReadlineMode,
)
from cliforge.prompts.validators import ValidationManager

__all__ = [
    "AnswerSet",
    "Choice",
    "DEFAULT_READLINE_MODE",
    "LineReader",
    "LineSource",
    "PromptDefinition",
    "PromptEngine",
    "PromptKind",
    "READLINE_MODES",
    "ReadlineMode",
    "ValidationManager",
    "ValidationRule",
    "fill_defaults",
    "validators",
]
