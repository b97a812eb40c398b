"""Line reader used by the prompt engine."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Literal, Protocol, TextIO, get_args

import click

from cliforge.errors import ConfigurationError, ErrorContext, ReadlineError

logger = logging.getLogger(__name__)

ReadlineMode = Literal["prompt", "stream"]
READLINE_MODES: tuple[str, ...] = get_args(ReadlineMode)
DEFAULT_READLINE_MODE: ReadlineMode = "prompt"


class LineSource(Protocol):
    """Anything that can ask a question and return one line of text."""

    def ask(self, text: str) -> str: ...


class LineReader:
    """Read one line of user input at a time.

    Modes:
        prompt: read through ``click.prompt`` (line editing on a terminal).
        stream: read raw lines from stdin, or from an injected stream.

    Switching modes closes the current handle; the next ``ask`` reopens it.
    """

    def __init__(
        self,
        mode: ReadlineMode = DEFAULT_READLINE_MODE,
        stream: TextIO | None = None,
    ) -> None:
        self._mode = _check_mode(mode)
        self._stream_override = stream
        self._stream: TextIO | None = None
        self._is_open = False

    @property
    def mode(self) -> ReadlineMode:
        return self._mode

    @property
    def is_open(self) -> bool:
        return self._is_open

    def set_mode(self, mode: ReadlineMode) -> None:
        """Switch mode, releasing any open handle."""
        self.close()
        self._mode = _check_mode(mode)
        logger.debug("Readline mode set to %s", self._mode)

    def open(self) -> None:
        if self._is_open:
            return
        if self._mode == "stream":
            self._stream = self._stream_override or click.get_text_stream("stdin")
        self._is_open = True

    def close(self) -> None:
        self._stream = None
        self._is_open = False

    def ask(self, text: str) -> str:
        """Show text and return the line typed, without its line ending.

        Raises:
            ReadlineError: If input ends or is aborted.
        """
        self.open()
        if self._mode == "prompt":
            try:
                value: str = click.prompt(
                    text, default="", show_default=False, prompt_suffix=""
                )
            except click.Abort as e:
                raise ReadlineError(
                    "Input aborted", ErrorContext(operation="ask")
                ) from e
            return value

        assert self._stream is not None
        click.echo(text, nl=False)
        line = self._stream.readline()
        if line == "":
            raise ReadlineError("End of input reached", ErrorContext(operation="ask"))
        return line.rstrip("\r\n")

    def __enter__(self) -> LineReader:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _check_mode(mode: str) -> ReadlineMode:
    if mode not in READLINE_MODES:
        raise ConfigurationError(
            f"Unknown readline mode '{mode}'. Expected one of: {', '.join(READLINE_MODES)}",
            ErrorContext(operation="readline"),
        )
    return mode  # type: ignore[return-value]
