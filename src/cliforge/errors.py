"""Error types raised by cliforge.

Every error carries a structured context and a creation timestamp so the
driver can log or serialize any failure the same way regardless of kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class ErrorContext:
    """Structured details attached to a CLIError."""

    operation: str | None = None
    project_name: str | None = None
    template: str | None = None
    file_path: str | None = None
    additional_info: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting unset fields."""
        result: dict[str, Any] = {}
        if self.operation is not None:
            result["operation"] = self.operation
        if self.project_name is not None:
            result["project_name"] = self.project_name
        if self.template is not None:
            result["template"] = self.template
        if self.file_path is not None:
            result["file_path"] = self.file_path
        if self.additional_info:
            result["additional_info"] = dict(self.additional_info)
        return result


class CLIError(Exception):
    """Base class for all cliforge errors."""

    code: str = "CLI_ERROR"

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        self.message = message
        self.context = context if context is not None else ErrorContext()
        self.timestamp = datetime.now(UTC)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logging."""
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


class ValidationError(CLIError):
    """Raised when a value fails a validation rule."""

    code = "VALIDATION_ERROR"


class TemplateError(CLIError):
    """Raised when a template cannot be found or is malformed."""

    code = "TEMPLATE_ERROR"


class FileSystemError(CLIError):
    """Raised when creating a directory or writing a file fails."""

    code = "FILESYSTEM_ERROR"


class DependencyError(CLIError):
    """Raised when installing project dependencies fails."""

    code = "DEPENDENCY_ERROR"


class PluginError(CLIError):
    """Raised on plugin install/uninstall or configuration problems."""

    code = "PLUGIN_ERROR"


class ConfigurationError(CLIError):
    """Raised when the CLI setup or a settings file is invalid."""

    code = "CONFIGURATION_ERROR"


class PromptError(CLIError):
    """Raised when a prompt definition cannot be asked (e.g. missing choices)."""

    code = "PROMPT_ERROR"


class ReadlineError(CLIError):
    """Raised when user input cannot be read."""

    code = "READLINE_ERROR"


class ProcessError(CLIError):
    """Raised when an external command cannot be run or exits non-zero."""

    code = "PROCESS_ERROR"
