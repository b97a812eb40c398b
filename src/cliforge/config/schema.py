"""User settings schema for cliforge."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, cast

from cliforge.errors import ConfigurationError, ErrorContext
from cliforge.prompts.reader import READLINE_MODES, ReadlineMode


@dataclass
class Settings:
    """User settings read from config.yaml files.

    None values indicate "not set" and will use defaults or be inherited.
    """

    theme: str | None = None
    readline_mode: ReadlineMode | None = None
    allow_mode_selection: bool | None = None
    skip_install: bool | None = None
    install_command: str | None = None
    output_root: str | None = None

    def merge(self, other: Settings) -> Settings:
        """Merge another settings object into this one.

        Values from `other` take precedence when they are not None.
        Returns a new Settings instance.
        """
        return Settings(
            **{
                f.name: (
                    getattr(other, f.name)
                    if getattr(other, f.name) is not None
                    else getattr(self, f.name)
                )
                for f in fields(self)
            }
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary, excluding None values."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary.

        Unknown keys are ignored.

        Raises:
            ConfigurationError: If readline_mode is not a known mode.
        """
        mode_raw = data.get("readline_mode")
        readline_mode: ReadlineMode | None = None
        if mode_raw is not None:
            if mode_raw not in READLINE_MODES:
                raise ConfigurationError(
                    f"Invalid readline_mode '{mode_raw}'. "
                    f"Expected one of: {', '.join(READLINE_MODES)}",
                    ErrorContext(operation="loadSettings"),
                )
            readline_mode = cast(ReadlineMode, mode_raw)

        def _bool(key: str) -> bool | None:
            raw = data.get(key)
            return bool(raw) if raw is not None else None

        def _str(key: str) -> str | None:
            raw = data.get(key)
            return str(raw) if raw is not None else None

        return cls(
            theme=_str("theme"),
            readline_mode=readline_mode,
            allow_mode_selection=_bool("allow_mode_selection"),
            skip_install=_bool("skip_install"),
            install_command=_str("install_command"),
            output_root=_str("output_root"),
        )


# Default settings (used when not specified anywhere)
DEFAULT_SETTINGS = Settings(
    theme="default",
    readline_mode="prompt",
    allow_mode_selection=False,
    skip_install=False,
    install_command="npm install",
    output_root=".",
)
