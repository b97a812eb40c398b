"""Console presentation and colour themes."""

from cliforge.ui.presenter import Presenter
from cliforge.ui.themes import DEFAULT_THEME, THEMES, Theme, get_theme

__all__ = [
    "DEFAULT_THEME",
    "Presenter",
    "THEMES",
    "Theme",
    "get_theme",
]
