"""Plugin definitions and lifecycle hook names."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cliforge.prompts.base import ValidationRule
    from cliforge.templates.base import TemplateDefinition
    from cliforge.ui.themes import Theme

# MAJOR.MINOR.PATCH with optional -prerelease and +build identifiers
SEMVER_RE = re.compile(
    r"^(\d+)\.(\d+)\.(\d+)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class HookName(Enum):
    """Lifecycle events plugins may subscribe to."""

    BEFORE_GENERATE = "before_generate"
    AFTER_GENERATE = "after_generate"
    BEFORE_INSTALL = "before_install"
    AFTER_INSTALL = "after_install"
    ON_ERROR = "on_error"


def is_semver(version: str) -> bool:
    """Check a version string against the semantic versioning grammar."""
    return SEMVER_RE.fullmatch(version) is not None


@dataclass(frozen=True)
class PluginDefinition:
    """An installable bundle of hooks, templates, validators and themes.

    Hook handlers receive positional arguments chosen by the caller and may
    return an awaitable. The ``on_error`` handler receives
    ``(error, context)`` where context is ``"hook:<event>"``.
    """

    name: str
    version: str
    description: str | None = None
    hooks: dict[str, Callable[..., Any]] = field(default_factory=dict)
    templates: tuple[TemplateDefinition, ...] = ()
    validators: dict[str, ValidationRule] = field(default_factory=dict)
    themes: dict[str, Theme] = field(default_factory=dict)

    def __post_init__(self) -> None:
        hooks = {
            (key.value if isinstance(key, HookName) else str(key)): handler
            for key, handler in self.hooks.items()
        }
        object.__setattr__(self, "hooks", hooks)
        if not isinstance(self.templates, tuple):
            object.__setattr__(self, "templates", tuple(self.templates))

    def get_hook(self, hook: HookName | str) -> Callable[..., Any] | None:
        key = hook.value if isinstance(hook, HookName) else hook
        return self.hooks.get(key)
