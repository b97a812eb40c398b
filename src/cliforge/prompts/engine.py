"""Prompt resolution: walk prompt definitions and build an answer set."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from cliforge.errors import ErrorContext, PromptError
from cliforge.prompts.base import AnswerSet, Choice, PromptDefinition, PromptKind
from cliforge.prompts.reader import LineSource
from cliforge.ui.presenter import Presenter

logger = logging.getLogger(__name__)

AFFIRMATIVE = frozenset({"y", "yes", "true", "1"})


def fill_defaults(prompts: Iterable[PromptDefinition], answers: AnswerSet) -> AnswerSet:
    """Return a copy of answers with unset, visible prompts filled from defaults.

    Performs no I/O.
    """
    result = dict(answers)
    for prompt in prompts:
        if prompt.name in result or prompt.default is None:
            continue
        if not prompt.is_visible(result):
            continue
        result[prompt.name] = copy.copy(prompt.default)
    return result


def _parse_index(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


class PromptEngine:
    """Ask prompts one at a time and collect the answers.

    Prompts are resolved sequentially because visibility predicates and
    validation rules may read earlier answers.
    """

    def __init__(self, reader: LineSource, presenter: Presenter | None = None) -> None:
        self.reader = reader
        self.presenter = presenter or Presenter()

    def resolve(
        self,
        prompts: Sequence[PromptDefinition],
        seed: AnswerSet | None = None,
        *,
        skip_interactive: bool = False,
    ) -> AnswerSet:
        """Resolve prompts into an answer set.

        Args:
            prompts: Prompt definitions in the order they should be asked.
            seed: Pre-answered values (e.g. from command-line flags). A seeded
                name is never asked. None values count as unset.
            skip_interactive: Fill unset prompts from their defaults instead
                of asking; no input is read.

        Raises:
            PromptError: If a select or multiselect prompt has no choices.
        """
        answers: AnswerSet = {
            k: v for k, v in (seed or {}).items() if v is not None
        }

        if skip_interactive:
            return fill_defaults(prompts, answers)

        for prompt in prompts:
            if not prompt.is_visible(answers):
                logger.debug("Skipping hidden prompt '%s'", prompt.name)
                continue
            if prompt.name in answers:
                logger.debug("Prompt '%s' already answered", prompt.name)
                continue

            value = self.ask(prompt, answers)
            if prompt.transform is not None:
                value = prompt.transform(value)
            answers[prompt.name] = value

        return answers

    def ask(self, prompt: PromptDefinition, answers: AnswerSet) -> Any:
        """Ask a single prompt and return its raw (untransformed) value."""
        kind = prompt.kind
        if kind is PromptKind.INPUT:
            return self._ask_input(prompt, answers)
        if kind is PromptKind.SELECT:
            return self._ask_select(prompt)
        if kind is PromptKind.CONFIRM:
            return self._ask_confirm(prompt)
        if kind is PromptKind.MULTISELECT:
            return self._ask_multiselect(prompt)
        raise PromptError(
            f"Unsupported prompt type: {kind}",
            ErrorContext(operation="prompt", additional_info={"prompt": prompt.name}),
        )

    def _ask_input(self, prompt: PromptDefinition, answers: AnswerSet) -> Any:
        hint = f" ({prompt.default})" if prompt.default else ""
        while True:
            value: Any = self.reader.ask(f"{prompt.message}{hint}: ")
            if not value and prompt.default:
                value = prompt.default

            if prompt.validate is None:
                return value

            error = prompt.validate.check(value, answers)
            if error is None:
                return value
            self.presenter.show_error(error)

    def _ask_select(self, prompt: PromptDefinition) -> Any:
        choices = self._choices(prompt)
        self.presenter.show_info(prompt.message)
        self.presenter.show_choices(choices)

        while True:
            index = _parse_index(self.reader.ask("Select option: "))
            if index is not None and 1 <= index <= len(choices):
                return choices[index - 1].value
            self.presenter.show_error("Invalid selection. Please try again.")

    def _ask_confirm(self, prompt: PromptDefinition) -> bool:
        # An empty answer is "no" even when the default is truthy
        hint = " (Y/n)" if prompt.default else " (y/N)"
        answer = self.reader.ask(f"{prompt.message}{hint}: ")
        return answer.strip().lower() in AFFIRMATIVE

    def _ask_multiselect(self, prompt: PromptDefinition) -> list[Any]:
        choices = self._choices(prompt)
        self.presenter.show_info(f"{prompt.message} (comma-separated numbers)")
        self.presenter.show_choices(choices)

        answer = self.reader.ask("Select options: ")
        selected: list[Any] = []
        for token in answer.split(","):
            index = _parse_index(token)
            if index is not None and 1 <= index <= len(choices):
                selected.append(choices[index - 1].value)
        return selected

    def _choices(self, prompt: PromptDefinition) -> tuple[Choice, ...]:
        if not prompt.choices:
            raise PromptError(
                f"{prompt.kind.value.capitalize()} prompt '{prompt.name}' requires choices",
                ErrorContext(operation="prompt", additional_info={"prompt": prompt.name}),
            )
        return prompt.choices
