"""Materialize a template into a project directory."""

from __future__ import annotations

import asyncio
import inspect
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cliforge.errors import DependencyError, ErrorContext, FileSystemError, ProcessError
from cliforge.io.fs import FileWriter
from cliforge.io.process import ProcessRunner
from cliforge.plugins.base import HookName
from cliforge.templates.base import GeneratorConfig, TemplateDefinition
from cliforge.ui.presenter import Presenter

if TYPE_CHECKING:
    from cliforge.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"
MANIFEST_VERSION = "0.1.0"
DEFAULT_INSTALL_COMMAND = "npm install"


def build_manifest(template: TemplateDefinition, project_name: str) -> dict[str, Any]:
    """Compose the manifest document. Key order is part of the output format."""
    deps = template.dependencies
    return {
        "name": project_name,
        "version": MANIFEST_VERSION,
        "private": True,
        "scripts": dict(template.scripts),
        "dependencies": dict(deps.runtime) if deps else {},
        "devDependencies": dict(deps.dev) if deps else {},
        "peerDependencies": dict(deps.peer) if deps else {},
    }


class ProjectGenerator:
    """Write a template's files and manifest, install dependencies, run post-install.

    Steps run strictly in order with no rollback: files written before a
    failure stay on disk.
    """

    def __init__(
        self,
        writer: FileWriter | None = None,
        runner: ProcessRunner | None = None,
        presenter: Presenter | None = None,
        plugins: PluginManager | None = None,
        install_command: str = DEFAULT_INSTALL_COMMAND,
    ) -> None:
        self.writer = writer or FileWriter()
        self.runner = runner or ProcessRunner()
        self.presenter = presenter or Presenter()
        self.plugins = plugins
        self.install_command = install_command

    async def generate(
        self, template: TemplateDefinition, config: GeneratorConfig
    ) -> Path:
        """Generate a project and return its path.

        Raises:
            FileSystemError: If the project directory, a file or the manifest
                cannot be written.
            Exception: Whatever the template's post_install hook raises.
        """
        project_path = config.project_path
        logger.info(
            "Generating '%s' from template '%s' in %s",
            config.project_name,
            template.name,
            project_path,
        )

        try:
            self.writer.ensure_directory(project_path)
        except OSError as e:
            raise FileSystemError(
                f"Failed to create project directory: {e}",
                ErrorContext(
                    operation="generate",
                    project_name=config.project_name,
                    template=config.template,
                    file_path=str(project_path),
                ),
            ) from e

        self.generate_files(template, config, project_path)
        self.generate_manifest(template, config, project_path)

        wants_install = config.answers.get("install_deps") is not False
        if template.dependencies is not None and wants_install:
            await self.install_dependencies(project_path)

        if template.post_install is not None:
            result = template.post_install(project_path, config.answers)
            if inspect.isawaitable(result):
                await result

        return project_path

    def generate_files(
        self, template: TemplateDefinition, config: GeneratorConfig, project_path: Path
    ) -> list[Path]:
        """Write every included file in declaration order.

        A later file with the same path overwrites an earlier one.
        """
        written: list[Path] = []
        try:
            for spec in template.files:
                if not spec.is_included(config.answers):
                    logger.debug("Skipping %s (condition false)", spec.path)
                    continue
                file_path = project_path / spec.path
                self.writer.write_text(file_path, spec.render(config.answers))
                written.append(file_path)
        except Exception as e:
            self.presenter.show_error("Failed to generate project files")
            raise FileSystemError(
                f"Failed to generate files: {e}",
                ErrorContext(
                    operation="generateFiles",
                    project_name=config.project_name,
                    template=config.template,
                ),
            ) from e

        self.presenter.show_success("Project files generated")
        return written

    def generate_manifest(
        self, template: TemplateDefinition, config: GeneratorConfig, project_path: Path
    ) -> Path:
        """Write package.json with scripts and dependency maps."""
        manifest_path = project_path / MANIFEST_FILENAME
        try:
            manifest = build_manifest(template, config.project_name)
            self.writer.write_json(manifest_path, manifest)
        except Exception as e:
            raise FileSystemError(
                f"Failed to generate {MANIFEST_FILENAME}: {e}",
                ErrorContext(
                    operation="generatePackageJson",
                    project_name=config.project_name,
                    file_path=str(manifest_path),
                ),
            ) from e
        return manifest_path

    async def install_dependencies(self, project_path: Path) -> bool:
        """Run the install command in the project directory.

        Failure is reported and logged but not raised. Returns True on success.
        """
        if self.plugins is not None:
            await self.plugins.execute_hook(HookName.BEFORE_INSTALL, project_path)

        self.presenter.show_info("Installing dependencies...")
        try:
            await asyncio.to_thread(self.runner.run, self.install_command, project_path)
        except ProcessError as e:
            error = DependencyError(
                f"Failed to install dependencies: {e.message}",
                ErrorContext(
                    operation="installDependencies", file_path=str(project_path)
                ),
            )
            logger.warning("%s", error.message, extra={"error": error.to_dict()})
            self.presenter.show_warning(error.message)
            self.presenter.line(
                f"You can install them manually later with: {self.install_command}",
                muted=True,
            )
            return False

        self.presenter.show_success("Dependencies installed successfully")
        if self.plugins is not None:
            await self.plugins.execute_hook(HookName.AFTER_INSTALL, project_path)
        return True
