"""cliforge - build interactive project scaffolding CLIs."""

from cliforge.builder import CLIBuilder, CLIConfig, create_cli
from cliforge.errors import (
    CLIError,
    ConfigurationError,
    DependencyError,
    ErrorContext,
    FileSystemError,
    PluginError,
    ProcessError,
    PromptError,
    ReadlineError,
    TemplateError,
    ValidationError,
)
from cliforge.plugins import HookName, PluginDefinition, PluginManager
from cliforge.prompts import (
    Choice,
    LineReader,
    PromptDefinition,
    PromptEngine,
    PromptKind,
    ValidationManager,
    ValidationRule,
    validators,
)
from cliforge.templates import (
    FileSpec,
    GeneratorConfig,
    ManifestDependencies,
    ProjectGenerator,
    TemplateDefinition,
)
from cliforge.ui import THEMES, Presenter, Theme

__version__ = "0.1.0"

__all__ = [
    "CLIBuilder",
    "CLIConfig",
    "CLIError",
    "Choice",
    "ConfigurationError",
    "DependencyError",
    "ErrorContext",
    "FileSpec",
    "FileSystemError",
    "GeneratorConfig",
    "HookName",
    "LineReader",
    "ManifestDependencies",
    "PluginDefinition",
    "PluginError",
    "PluginManager",
    "Presenter",
    "ProcessError",
    "ProjectGenerator",
    "PromptDefinition",
    "PromptEngine",
    "PromptError",
    "PromptKind",
    "ReadlineError",
    "THEMES",
    "TemplateDefinition",
    "TemplateError",
    "Theme",
    "ValidationError",
    "ValidationManager",
    "ValidationRule",
    "__version__",
    "create_cli",
    "validators",
]
