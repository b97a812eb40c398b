"""Command-line interface for cliforge."""

import logging
from pathlib import Path

import click

from cliforge import __version__
from cliforge.builder import CLIBuilder, CLIConfig
from cliforge.config import (
    Settings,
    get_home_config_path,
    get_local_config_path,
    load_settings,
    load_user_settings,
)
from cliforge.console import console
from cliforge.errors import CLIError
from cliforge.log import setup_logging
from cliforge.prompts import (
    READLINE_MODES,
    Choice,
    PromptDefinition,
    PromptKind,
    ReadlineMode,
    validators,
)
from cliforge.templates import BUILTIN_TEMPLATES, TemplateDefinition, get_all_templates
from cliforge.ui import THEMES

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "my-project"

FEATURE_CHOICES = (
    Choice("ESLint", "eslint", "Linting with the recommended rule set"),
    Choice("Prettier", "prettier", "Opinionated code formatting"),
)


def load_templates() -> dict[str, TemplateDefinition]:
    """Built-in templates overlaid with templates found on disk."""
    templates = {t.name: t for t in BUILTIN_TEMPLATES}
    templates.update(get_all_templates())
    return templates


def default_prompts(
    templates: dict[str, TemplateDefinition],
) -> tuple[PromptDefinition, ...]:
    """The question list used by ``cliforge new``."""
    names = sorted(templates)
    return (
        PromptDefinition(
            name="project_name",
            kind=PromptKind.INPUT,
            message="Project name",
            default=DEFAULT_PROJECT_NAME,
            validate=validators.project_name,
        ),
        PromptDefinition(
            name="description",
            kind=PromptKind.INPUT,
            message="Description",
        ),
        PromptDefinition(
            name="template",
            kind=PromptKind.SELECT,
            message="Choose a template:",
            default=names[0] if names else None,
            choices=tuple(
                Choice(name, name, templates[name].description or None)
                for name in names
            ),
        ),
        PromptDefinition(
            name="features",
            kind=PromptKind.MULTISELECT,
            message="Extra tooling",
            default=[],
            choices=FEATURE_CHOICES,
        ),
        PromptDefinition(
            name="install_deps",
            kind=PromptKind.CONFIRM,
            message="Install dependencies?",
            default=True,
        ),
    )


def _get_source_label(template: TemplateDefinition) -> str:
    """Get a label indicating where a template was loaded from."""
    if template.source is None:
        return "(built-in)"
    source_str = str(template.source)
    if ".cliforge/templates" in source_str:
        if str(Path.cwd()) in source_str:
            return "(local)"
        return "(global)"
    return "(package)"


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"cliforge [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def main(ctx: click.Context) -> None:
    """cliforge - interactive project scaffolding."""
    if ctx.invoked_subcommand is None:
        console.print("[bold]cliforge[/bold] - interactive project scaffolding")
        console.print("\nRun [cyan]cliforge --help[/cyan] for available commands.")


@main.command()
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
@click.option("--skip-install", is_flag=True, help="Do not install dependencies.")
@click.option(
    "--theme",
    type=click.Choice(sorted(THEMES)),
    help="Colour theme for output.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def new(
    project_name: str | None,
    template: str | None,
    yes: bool,
    mode: ReadlineMode | None,
    output: Path | None,
    skip_install: bool,
    theme: str | None,
    verbose: bool,
) -> None:
    """Create a new project from a template.

    Answers given as arguments or options are not asked again.
    """
    setup_logging(verbose)

    try:
        settings = load_user_settings().merge(
            Settings(theme=theme, skip_install=True if skip_install else None)
        )
        templates = load_templates()
        builder = CLIBuilder(
            CLIConfig(
                name="cliforge",
                version=__version__,
                description="Create a new project from a template.",
                prompts=default_prompts(templates),
                templates=tuple(templates.values()),
                custom_validators={"project_name": validators.project_name},
            ),
            settings=settings,
        )
    except CLIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1) from e

    builder.run(project_name, template, yes=yes, mode=mode, output=output)


@main.command()
@click.option("--verbose", "-v", is_flag=True, help="Show template details.")
def templates(verbose: bool) -> None:
    """List available templates."""
    available = load_templates()

    console.print("[bold]Available Templates:[/bold]\n")
    for name, template in sorted(available.items()):
        console.print(f"  [cyan]{name}[/cyan] {_get_source_label(template)}")
        if verbose:
            if template.description:
                console.print(f"    {template.description.strip()}")
            console.print(f"    [dim]Files: {len(template.files)}[/dim]")
            if template.scripts:
                console.print(f"    [dim]Scripts: {', '.join(template.scripts)}[/dim]")
            console.print()


@main.command()
@click.option("--show", is_flag=True, help="Show the effective configuration.")
def config(show: bool) -> None:
    """Inspect cliforge settings.

    Settings are read from ~/.cliforge/config.yaml and ./.cliforge/config.yaml;
    the local file wins.
    """
    if not show:
        click.echo(click.get_current_context().get_help())
        return

    try:
        settings = load_settings()
    except CLIError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise SystemExit(1) from e

    console.print("\n[bold]Current Effective Configuration:[/bold]")
    console.print(f"  [dim]Global: {get_home_config_path()}[/dim]")
    console.print(f"  [dim]Local: {get_local_config_path()}[/dim]")
    console.print()
    for key, value in settings.to_dict().items():
        console.print(f"  {key}: {value}")

    console.print()
    for label, path in (
        ("Global", get_home_config_path()),
        ("Local", get_local_config_path()),
    ):
        if path.exists():
            console.print(f"  [green]{label} config: exists[/green]")
        else:
            console.print(f"  [dim]{label} config: not found[/dim]")
