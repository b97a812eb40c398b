"""Shared test fixtures."""

from io import StringIO
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from cliforge.ui import Presenter


@pytest.fixture
def presenter() -> MagicMock:
    """A presenter that records calls instead of printing."""
    return MagicMock(spec=Presenter)


@pytest.fixture
def output() -> StringIO:
    """Buffer capturing what a real presenter prints."""
    return StringIO()


@pytest.fixture
def real_presenter(output: StringIO) -> Presenter:
    """A presenter printing plain text into the output buffer."""
    return Presenter(console=Console(file=output, width=120, color_system=None))
