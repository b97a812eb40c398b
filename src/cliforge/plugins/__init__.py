"""Plugin system: definitions, registry and hook fan-out."""

from cliforge.plugins.base import HookName, PluginDefinition, is_semver
from cliforge.plugins.manager import PluginManager, validate_plugin

__all__ = [
    "HookName",
    "PluginDefinition",
    "PluginManager",
    "is_semver",
    "validate_plugin",
]
