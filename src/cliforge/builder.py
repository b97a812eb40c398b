"""CLI builder: wire prompts, plugins and templates into a click command."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click

from cliforge.config import DEFAULT_SETTINGS, Settings, load_user_settings
from cliforge.errors import (
    CLIError,
    ConfigurationError,
    ErrorContext,
    PluginError,
    TemplateError,
    ValidationError,
)
from cliforge.log import setup_logging
from cliforge.plugins import HookName, PluginDefinition, PluginManager
from cliforge.prompts import (
    READLINE_MODES,
    AnswerSet,
    LineReader,
    PromptDefinition,
    PromptEngine,
    ReadlineMode,
    ValidationManager,
    ValidationRule,
)
from cliforge.templates import (
    GeneratorConfig,
    ProjectGenerator,
    TemplateDefinition,
    find_template,
    validate_template,
)
from cliforge.ui import DEFAULT_THEME, Presenter, Theme, get_theme

logger = logging.getLogger(__name__)


@dataclass
class CLIConfig:
    """Everything a scaffolding CLI is built from.

    Optional settings left as None fall back to user settings files and then
    to built-in defaults.
    """

    name: str
    version: str
    description: str = ""
    prompts: tuple[PromptDefinition, ...] = ()
    templates: tuple[TemplateDefinition, ...] = ()
    theme: Theme | str | None = None
    readline_mode: ReadlineMode | None = None
    allow_mode_selection: bool | None = None
    skip_install: bool | None = None
    install_command: str | None = None
    custom_validators: dict[str, ValidationRule] = field(default_factory=dict)
    plugins: tuple[PluginDefinition, ...] = ()

    def to_settings(self) -> Settings:
        """Settings declared by the CLI author."""
        return Settings(
            theme=self.theme if isinstance(self.theme, str) else None,
            readline_mode=self.readline_mode,
            allow_mode_selection=self.allow_mode_selection,
            skip_install=self.skip_install,
            install_command=self.install_command,
        )


def validate_cli_config(config: CLIConfig) -> None:
    """Check a CLIConfig before anything runs.

    Raises:
        ConfigurationError: If required fields are missing, names clash,
            a choice prompt has no choices or a template is malformed.
    """
    context = ErrorContext(operation="validateConfig")
    if not config.name:
        raise ConfigurationError("CLI name is required", context)
    if not config.version:
        raise ConfigurationError("CLI version is required", context)

    seen: set[str] = set()
    for prompt in config.prompts:
        if prompt.name in seen:
            raise ConfigurationError(f"Duplicate prompt name '{prompt.name}'", context)
        seen.add(prompt.name)
        if prompt.needs_choices and not prompt.choices:
            raise ConfigurationError(
                f"Prompt '{prompt.name}' of type {prompt.kind.value} requires choices",
                context,
            )

    seen = set()
    for template in config.templates:
        if template.name in seen:
            raise ConfigurationError(
                f"Duplicate template name '{template.name}'", context
            )
        seen.add(template.name)
        try:
            validate_template(template)
        except TemplateError as e:
            raise ConfigurationError(e.message, context) from e


class CLIBuilder:
    """Drive a scaffolding run: prompts, validation, hooks and generation."""

    def __init__(
        self,
        config: CLIConfig,
        settings: Settings | None = None,
        reader: LineReader | None = None,
        presenter: Presenter | None = None,
        generator: ProjectGenerator | None = None,
    ) -> None:
        validate_cli_config(config)
        self.config = config
        self._user_settings = settings or Settings()
        self.settings = DEFAULT_SETTINGS.merge(config.to_settings()).merge(
            self._user_settings
        )

        self.presenter = presenter or Presenter(DEFAULT_THEME)
        self.reader = reader or LineReader(self.settings.readline_mode or "prompt")
        self.plugins = PluginManager(self.presenter)
        self.validation = ValidationManager()
        self.engine = PromptEngine(self.reader, self.presenter)
        self.generator = generator or ProjectGenerator(
            presenter=self.presenter,
            plugins=self.plugins,
            install_command=self.install_command,
        )

        self.install_plugins()
        self.validation.add_validators(
            {**self.plugins.get_all_validators(), **config.custom_validators}
        )
        self.presenter.theme = self._resolve_theme()

    @property
    def install_command(self) -> str:
        return self.settings.install_command or "npm install"

    def install_plugins(self) -> None:
        """Install configured plugins; a broken plugin is reported and skipped."""
        for plugin in self.config.plugins:
            try:
                self.plugins.install(plugin)
            except PluginError as e:
                logger.warning("%s", e.message)
                self.presenter.show_warning(e.message)

    def _resolve_theme(self) -> Theme:
        if self._user_settings.theme is None and isinstance(self.config.theme, Theme):
            return self.config.theme
        extra = self.plugins.get_all_themes()
        return get_theme(self.settings.theme or "default", extra)

    def get_templates(self) -> dict[str, TemplateDefinition]:
        """Templates by name; the CLI's own templates win over plugin ones."""
        templates = {t.name: t for t in self.plugins.get_all_templates()}
        templates.update({t.name: t for t in self.config.templates})
        return templates

    def collect_answers(
        self,
        project_name: str | None = None,
        template: str | None = None,
        *,
        yes: bool = False,
        mode: ReadlineMode | None = None,
    ) -> AnswerSet:
        """Resolve prompts, seeding answers from command-line values."""
        seed: AnswerSet = {"project_name": project_name, "template": template}
        if self.settings.skip_install:
            seed["install_deps"] = False

        if yes:
            return self.engine.resolve(self.config.prompts, seed, skip_interactive=True)

        if mode is not None:
            self.reader.set_mode(mode)
        elif self.settings.allow_mode_selection:
            self.reader.set_mode(self._ask_mode())

        with self.reader:
            return self.engine.resolve(self.config.prompts, seed)

    def _ask_mode(self) -> ReadlineMode:
        self.presenter.show_info("Choose input mode:")
        self.presenter.line("1. Prompt - Recommended")
        self.presenter.line("2. Stream")
        with self.reader:
            choice = self.reader.ask("Select option (1-2): ")
        return "stream" if choice.strip() == "2" else "prompt"

    async def run_async(
        self,
        project_name: str | None = None,
        template: str | None = None,
        *,
        yes: bool = False,
        mode: ReadlineMode | None = None,
        output: Path | None = None,
    ) -> Path:
        """Run the whole flow and return the generated project path.

        Raises:
            CLIError: On any fatal failure (validation, template, filesystem).
        """
        self.presenter.show_welcome(self.config.name)

        answers = self.collect_answers(project_name, template, yes=yes, mode=mode)

        valid, message = self.validation.validate_answers(answers)
        if not valid:
            raise ValidationError(
                message or "Validation failed",
                ErrorContext(operation="validateAnswers"),
            )

        template_def = find_template(self.get_templates(), str(answers["template"]))
        gen_config = GeneratorConfig(
            project_name=str(answers["project_name"]),
            template=template_def.name,
            answers=answers,
            output_root=Path(output or self.settings.output_root or "."),
        )

        await self.plugins.execute_hook(HookName.BEFORE_GENERATE, gen_config)
        project_path = await self.generator.generate(template_def, gen_config)
        await self.plugins.execute_hook(
            HookName.AFTER_GENERATE, gen_config, project_path
        )

        self.presenter.show_success("Project created successfully!")
        self.show_next_steps(answers, template_def)
        return project_path

    async def _run_reporting_errors(self, **kwargs: Any) -> Path | None:
        try:
            return await self.run_async(**kwargs)
        except CLIError as e:
            logger.debug("Run failed: %s", e.to_dict())
            self.presenter.show_error(e.message)
            await self.plugins.execute_hook(HookName.ON_ERROR, e, "run")
        except Exception as e:
            logger.debug("Run failed", exc_info=True)
            self.presenter.show_error(f"An error occurred: {e}")
            await self.plugins.execute_hook(HookName.ON_ERROR, e, "run")
        return None

    def run(
        self,
        project_name: str | None = None,
        template: str | None = None,
        *,
        yes: bool = False,
        mode: ReadlineMode | None = None,
        output: Path | None = None,
    ) -> Path:
        """Run the flow; on failure show the error and exit with status 1."""
        project_path = asyncio.run(
            self._run_reporting_errors(
                project_name=project_name,
                template=template,
                yes=yes,
                mode=mode,
                output=output,
            )
        )
        if project_path is None:
            raise SystemExit(1)
        return project_path

    def show_next_steps(self, answers: AnswerSet, template: TemplateDefinition) -> None:
        self.presenter.show_info("Next steps:")
        self.presenter.line(f"  cd {answers['project_name']}")
        deps = template.dependencies
        skipped = answers.get("install_deps") is False
        if skipped and deps is not None and not deps.is_empty():
            self.presenter.line(f"  {self.install_command}")
        if "dev" in template.scripts:
            self.presenter.line("  npm run dev")
        self.presenter.line("Happy coding! 🚀", muted=True)

    def command(self) -> click.Command:
        """Build the click command for this CLI."""

        @click.command(name=self.config.name, help=self.config.description or None)
        @click.argument("project_name", required=False)
        @click.option("--template", "-t", help="Template to use.")
        @click.option("--yes", "-y", is_flag=True, help="Skip prompts and use defaults.")
        @click.option(
            "--mode",
            type=click.Choice(READLINE_MODES),
            help="How to read answers: prompt (interactive) or stream (raw stdin).",
        )
        @click.option(
            "--output",
            "-o",
            type=click.Path(file_okay=False, path_type=Path),
            help="Directory to create the project in.",
        )
        @click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
        @click.version_option(
            self.config.version,
            prog_name=self.config.name,
            message="%(prog)s %(version)s",
        )
        def _command(
            project_name: str | None,
            template: str | None,
            yes: bool,
            mode: ReadlineMode | None,
            output: Path | None,
            verbose: bool,
        ) -> None:
            setup_logging(verbose)
            self.run(project_name, template, yes=yes, mode=mode, output=output)

        return _command

    def parse(self, argv: list[str] | None = None) -> None:
        """Parse command-line arguments and run."""
        self.command().main(args=argv, prog_name=self.config.name)


def create_cli(config: CLIConfig, settings: Settings | None = None) -> CLIBuilder:
    """Create a CLIBuilder, reading user settings files when none are given."""
    if settings is None:
        settings = load_user_settings()
    return CLIBuilder(config, settings=settings)
