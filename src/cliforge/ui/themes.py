"""Colour themes for console output."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from typing import Any

from cliforge.errors import ConfigurationError, ErrorContext

_HEX_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


@dataclass(frozen=True)
class Theme:
    """Seven hex colours used by the presenter."""

    primary: str = "#3b82f6"
    secondary: str = "#6b7280"
    success: str = "#10b981"
    error: str = "#ef4444"
    warning: str = "#f59e0b"
    info: str = "#06b6d4"
    muted: str = "#9ca3af"

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not _HEX_RE.match(value):
                raise ConfigurationError(
                    f"Theme colour '{f.name}' must be a #rgb or #rrggbb hex value, "
                    f"got {value!r}",
                    ErrorContext(operation="theme"),
                )

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Theme:
        """Create from a dictionary. Missing colours fall back to the default theme."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: str(v) for k, v in data.items() if k in known})


DEFAULT_THEME = Theme()

THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "dark": Theme(
        primary="#60a5fa",
        secondary="#9ca3af",
        success="#34d399",
        error="#f87171",
        warning="#fbbf24",
        info="#22d3ee",
        muted="#6b7280",
    ),
    "minimal": Theme(
        primary="#000000",
        secondary="#666666",
        success="#008000",
        error="#ff0000",
        warning="#ffa500",
        info="#0000ff",
        muted="#999999",
    ),
    "vibrant": Theme(
        primary="#8b5cf6",
        secondary="#a78bfa",
        success="#06d6a0",
        error="#f72585",
        warning="#ffbe0b",
        info="#3a86ff",
        muted="#adb5bd",
    ),
}


def get_theme(name: str, extra: dict[str, Theme] | None = None) -> Theme:
    """Look up a theme by name among built-in and extra (plugin) themes."""
    available = {**THEMES, **(extra or {})}
    if name not in available:
        raise ConfigurationError(
            f"Unknown theme '{name}'. Available: {', '.join(sorted(available))}",
            ErrorContext(operation="theme"),
        )
    return available[name]
