"""Plugin registry and lifecycle hook fan-out."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any

from cliforge.errors import ErrorContext, PluginError
from cliforge.plugins.base import HookName, PluginDefinition, is_semver
from cliforge.ui.presenter import Presenter

if TYPE_CHECKING:
    from cliforge.prompts.base import ValidationRule
    from cliforge.templates.base import TemplateDefinition
    from cliforge.ui.themes import Theme

logger = logging.getLogger(__name__)


def validate_plugin(plugin: PluginDefinition) -> None:
    """Check required plugin fields.

    Raises:
        PluginError: If name or version is missing, or version is not semver.
    """
    if not plugin.name or not isinstance(plugin.name, str):
        raise PluginError("Plugin name is required and must be a string")
    if not plugin.version or not isinstance(plugin.version, str):
        raise PluginError("Plugin version is required and must be a string")
    if not is_semver(plugin.version):
        raise PluginError(
            f"Plugin version '{plugin.version}' is not a valid semantic version"
        )


class PluginManager:
    """Install plugins by name and dispatch lifecycle hooks to them.

    Hook failures are isolated per plugin: they are logged, forwarded to the
    plugin's ``on_error`` handler if it has one, and never raised.
    """

    name = "PluginManager"
    version = "1.0.0"

    def __init__(self, presenter: Presenter | None = None) -> None:
        self.presenter = presenter or Presenter()
        self._plugins: dict[str, PluginDefinition] = {}

    def install(self, plugin: PluginDefinition) -> None:
        """Validate and register a plugin.

        Raises:
            PluginError: If the name is taken or the definition is invalid.
        """
        try:
            if plugin.name in self._plugins:
                raise PluginError(f"Plugin '{plugin.name}' is already installed")
            validate_plugin(plugin)
        except PluginError as e:
            raise PluginError(
                f"Failed to install plugin '{plugin.name}': {e.message}",
                ErrorContext(
                    operation="install", additional_info={"plugin_name": plugin.name}
                ),
            ) from e

        self._plugins[plugin.name] = plugin
        logger.debug("Installed plugin %s %s", plugin.name, plugin.version)
        self.presenter.show_success(
            f"Plugin '{plugin.name}' v{plugin.version} installed successfully"
        )

    def uninstall(self, name: str) -> None:
        """Remove a plugin.

        Raises:
            PluginError: If no plugin with that name is installed.
        """
        if name not in self._plugins:
            raise PluginError(
                f"Failed to uninstall plugin '{name}': Plugin '{name}' is not installed",
                ErrorContext(operation="uninstall", additional_info={"plugin_name": name}),
            )

        del self._plugins[name]
        logger.debug("Uninstalled plugin %s", name)
        self.presenter.show_success(f"Plugin '{name}' uninstalled successfully")

    def get_plugin(self, name: str) -> PluginDefinition | None:
        return self._plugins.get(name)

    def list_plugins(self) -> list[PluginDefinition]:
        """Installed plugins in install order."""
        return list(self._plugins.values())

    def get_all_templates(self) -> list[TemplateDefinition]:
        templates: list[TemplateDefinition] = []
        for plugin in self._plugins.values():
            templates.extend(plugin.templates)
        return templates

    def get_all_validators(self) -> dict[str, ValidationRule]:
        validators: dict[str, ValidationRule] = {}
        for plugin in self._plugins.values():
            validators.update(plugin.validators)
        return validators

    def get_all_themes(self) -> dict[str, Theme]:
        themes: dict[str, Theme] = {}
        for plugin in self._plugins.values():
            themes.update(plugin.themes)
        return themes

    async def execute_hook(self, hook: HookName | str, *args: Any) -> None:
        """Call every plugin's handler for hook with args.

        Handlers run without waiting on each other; awaitable results are
        joined at the end regardless of individual failures.
        """
        hook_name = hook.value if isinstance(hook, HookName) else hook
        pending: list[asyncio.Future[None]] = []

        for plugin in list(self._plugins.values()):
            handler = plugin.get_hook(hook_name)
            if handler is None:
                continue

            try:
                result = handler(*args)
            except Exception as e:
                followup = self._handle_failure(plugin, hook_name, e)
                if followup is not None:
                    pending.append(asyncio.ensure_future(followup))
                continue

            if inspect.isawaitable(result):
                pending.append(
                    asyncio.ensure_future(self._settle(plugin, hook_name, result))
                )

        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _settle(
        self, plugin: PluginDefinition, hook_name: str, result: Awaitable[Any]
    ) -> None:
        try:
            await result
        except Exception as e:
            followup = self._handle_failure(plugin, hook_name, e)
            if followup is not None:
                await followup

    def _handle_failure(
        self, plugin: PluginDefinition, hook_name: str, error: Exception
    ) -> Awaitable[None] | None:
        """Log a hook failure and call the plugin's on_error handler.

        Returns an awaitable when on_error is asynchronous.
        """
        logger.warning(
            "Plugin '%s' hook '%s' failed: %s", plugin.name, hook_name, error
        )
        on_error = plugin.get_hook(HookName.ON_ERROR)
        if on_error is None or hook_name == HookName.ON_ERROR.value:
            return None

        try:
            result = on_error(error, f"hook:{hook_name}")
        except Exception as e:
            logger.error("Plugin '%s' on_error hook also failed: %s", plugin.name, e)
            return None

        if inspect.isawaitable(result):
            return self._settle_on_error(plugin, result)
        return None

    async def _settle_on_error(
        self, plugin: PluginDefinition, result: Awaitable[Any]
    ) -> None:
        try:
            await result
        except Exception as e:
            logger.error("Plugin '%s' on_error hook also failed: %s", plugin.name, e)
