"""Tests for the CLI builder."""

import asyncio
from collections.abc import Iterator
from io import StringIO
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from cliforge.builder import CLIBuilder, CLIConfig, create_cli, validate_cli_config
from cliforge.config import Settings
from cliforge.errors import ConfigurationError, ValidationError
from cliforge.io import ProcessRunner
from cliforge.plugins import HookName, PluginDefinition
from cliforge.prompts import Choice, LineReader, PromptDefinition, PromptKind, validators
from cliforge.templates import FileSpec, ManifestDependencies, TemplateDefinition
from cliforge.ui import THEMES, Theme

BASIC = TemplateDefinition(
    name="basic",
    description="Basic project",
    files=(FileSpec("README.md", lambda a: f"# {a['project_name']}\n"),),
    dependencies=ManifestDependencies(runtime={"express": "^4.18.0"}),
    scripts={"dev": "node index.js"},
)
OTHER = TemplateDefinition(name="other", description="Another project")

PROMPTS = (
    PromptDefinition(
        name="project_name",
        kind=PromptKind.INPUT,
        message="Project name",
        default="my-app",
        validate=validators.project_name,
    ),
    PromptDefinition(
        name="template",
        kind=PromptKind.SELECT,
        message="Template",
        default="basic",
        choices=(Choice("Basic", "basic"), Choice("Other", "other")),
    ),
    PromptDefinition(
        name="install_deps",
        kind=PromptKind.CONFIRM,
        message="Install dependencies?",
        default=True,
    ),
)


def _config(**kwargs: Any) -> CLIConfig:
    values: dict[str, Any] = {
        "name": "create-app",
        "version": "1.0.0",
        "prompts": PROMPTS,
        "templates": (BASIC, OTHER),
    }
    values.update(kwargs)
    return CLIConfig(**values)


def _builder(
    presenter: MagicMock,
    answers: str = "",
    config: CLIConfig | None = None,
    settings: Settings | None = None,
) -> CLIBuilder:
    builder = CLIBuilder(
        config or _config(),
        settings=settings or Settings(),
        reader=LineReader("stream", stream=StringIO(answers)),
        presenter=presenter,
    )
    builder.generator.runner = MagicMock(spec=ProcessRunner)
    return builder


class TestValidateCLIConfig:
    """Tests for CLI configuration checks."""

    def test_valid(self) -> None:
        """Test that a complete configuration passes."""
        validate_cli_config(_config())

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"name": ""}, "CLI name is required"),
            ({"version": ""}, "CLI version is required"),
            ({"prompts": PROMPTS + PROMPTS[:1]}, "Duplicate prompt name 'project_name'"),
            (
                {"prompts": (PromptDefinition(name="t", kind=PromptKind.SELECT, message="T"),)},
                "Prompt 't' of type select requires choices",
            ),
            ({"templates": (BASIC, BASIC)}, "Duplicate template name 'basic'"),
            (
                {"templates": (TemplateDefinition(name="", description=""),)},
                "Template name is required",
            ),
        ],
    )
    def test_invalid(self, kwargs: dict[str, Any], message: str) -> None:
        """Test each configuration error."""
        with pytest.raises(ConfigurationError, match=message):
            validate_cli_config(_config(**kwargs))

    def test_builder_validates_on_construction(self, presenter: MagicMock) -> None:
        """Test that a bad config fails before anything runs."""
        with pytest.raises(ConfigurationError):
            CLIBuilder(_config(name=""), settings=Settings(), presenter=presenter)


class TestSetup:
    """Tests for builder wiring: settings, plugins, themes and templates."""

    def test_settings_precedence(self, presenter: MagicMock) -> None:
        """Test defaults < CLI author < user settings."""
        builder = _builder(
            presenter,
            config=_config(install_command="yarn", skip_install=True),
            settings=Settings(install_command="pnpm install"),
        )

        assert builder.settings.install_command == "pnpm install"
        assert builder.settings.skip_install is True
        assert builder.settings.readline_mode == "prompt"
        assert builder.generator.install_command == "pnpm install"

    def test_user_theme_by_name(self, presenter: MagicMock) -> None:
        """Test that a theme name from settings is applied."""
        builder = _builder(presenter, settings=Settings(theme="dark"))
        assert builder.presenter.theme is THEMES["dark"]

    def test_author_theme_object(self, presenter: MagicMock) -> None:
        """Test that a Theme given in the CLI config is used directly."""
        custom = Theme(primary="#123456")
        builder = _builder(presenter, config=_config(theme=custom))
        assert builder.presenter.theme is custom

    def test_plugin_theme(self, presenter: MagicMock) -> None:
        """Test that plugin themes can be selected by name."""
        ocean = Theme(primary="#0077be")
        plugin = PluginDefinition(name="ocean", version="1.0.0", themes={"ocean": ocean})
        builder = _builder(
            presenter, config=_config(plugins=(plugin,)), settings=Settings(theme="ocean")
        )
        assert builder.presenter.theme is ocean

    def test_broken_plugin_is_skipped(self, presenter: MagicMock) -> None:
        """Test that an invalid plugin is reported and not installed."""
        good = PluginDefinition(name="good", version="1.0.0")
        bad = PluginDefinition(name="bad", version="latest")

        builder = _builder(presenter, config=_config(plugins=(bad, good)))

        assert [p.name for p in builder.plugins.list_plugins()] == ["good"]
        presenter.show_warning.assert_called_once_with(
            "Failed to install plugin 'bad': "
            "Plugin version 'latest' is not a valid semantic version"
        )

    def test_templates_from_plugins(self, presenter: MagicMock) -> None:
        """Test that plugin templates are added and config templates win."""
        plugin_basic = TemplateDefinition(name="basic", description="from plugin")
        extra = TemplateDefinition(name="extra", description="from plugin")
        plugin = PluginDefinition(
            name="p", version="1.0.0", templates=(plugin_basic, extra)
        )

        templates = _builder(presenter, config=_config(plugins=(plugin,))).get_templates()

        assert templates["basic"] is BASIC
        assert templates["extra"] is extra

    def test_validators_from_plugins_and_config(self, presenter: MagicMock) -> None:
        """Test that the CLI's own validators override plugin ones."""
        plugin = PluginDefinition(
            name="p",
            version="1.0.0",
            validators={"author": validators.required, "email": validators.email},
        )
        builder = _builder(
            presenter,
            config=_config(
                plugins=(plugin,), custom_validators={"author": validators.min_length(2)}
            ),
        )

        assert builder.validation.get_validator("email") is validators.email
        assert builder.validation.get_validator("author") is not validators.required


class TestCollectAnswers:
    """Tests for answer collection."""

    def test_seeds_from_arguments(self, presenter: MagicMock) -> None:
        """Test that arguments are not asked again."""
        builder = _builder(presenter, answers="yes\n")

        answers = builder.collect_answers("demo", "other")

        assert answers == {"project_name": "demo", "template": "other", "install_deps": True}

    def test_yes_uses_defaults(self, presenter: MagicMock) -> None:
        """Test that --yes reads nothing and fills defaults."""
        builder = _builder(presenter)

        answers = builder.collect_answers(yes=True)

        assert answers == {"project_name": "my-app", "template": "basic", "install_deps": True}

    def test_skip_install_setting_seeds_answer(self, presenter: MagicMock) -> None:
        """Test that skip_install pre-answers the install question."""
        builder = _builder(presenter, settings=Settings(skip_install=True))

        assert builder.collect_answers("demo", "basic")["install_deps"] is False

    def test_mode_selection(self, presenter: MagicMock) -> None:
        """Test that mode selection switches the reader."""
        builder = _builder(
            presenter, answers="2\ndemo\n1\nn\n", settings=Settings(allow_mode_selection=True)
        )

        answers = builder.collect_answers()

        assert builder.reader.mode == "stream"
        assert answers == {"project_name": "demo", "template": "basic", "install_deps": False}
        presenter.show_info.assert_any_call("Choose input mode:")


class TestRun:
    """Tests for the full run."""

    def test_creates_project(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test a complete interactive run and its hook order."""
        events: list[tuple[Any, ...]] = []
        plugin = PluginDefinition(
            name="recorder",
            version="1.0.0",
            hooks={
                HookName.BEFORE_GENERATE: lambda cfg: events.append(("before", cfg.template)),
                HookName.AFTER_GENERATE: lambda cfg, path: events.append(("after", path)),
            },
        )
        builder = _builder(presenter, answers="1\nn\n", config=_config(plugins=(plugin,)))

        project_path = builder.run("demo", output=tmp_path)

        assert project_path == tmp_path / "demo"
        assert (project_path / "README.md").read_text(encoding="utf-8") == "# demo\n"
        assert (project_path / "package.json").exists()
        assert events == [("before", "basic"), ("after", project_path)]
        builder.generator.runner.run.assert_not_called()
        presenter.show_success.assert_any_call("Project created successfully!")
        presenter.line.assert_any_call("  cd demo")
        presenter.line.assert_any_call("  npm install")

    def test_no_install_hint_for_empty_dependencies(
        self, presenter: MagicMock, tmp_path: Path
    ) -> None:
        """Test that next steps omit the install command when nothing is declared."""
        empty = TemplateDefinition(
            name="basic", description="", dependencies=ManifestDependencies()
        )
        builder = _builder(presenter, answers="n\n", config=_config(templates=(empty,)))

        builder.run("demo", "basic", output=tmp_path)

        lines = [c.args[0] for c in presenter.line.call_args_list]
        assert "  cd demo" in lines
        assert "  npm install" not in lines

    def test_installs_when_confirmed(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that confirming the install runs the install command."""
        builder = _builder(presenter, answers="y\n")

        builder.run("demo", "basic", output=tmp_path)

        builder.generator.runner.run.assert_called_once_with("npm install", tmp_path / "demo")

    def test_output_root_from_settings(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that output_root is used when no output is given."""
        builder = _builder(presenter, settings=Settings(output_root=str(tmp_path)))

        assert builder.run("demo", "other", yes=True) == tmp_path / "demo"

    def test_unknown_template_exits(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that an unknown template is reported and exits 1."""
        errors: list[tuple[Exception, str]] = []
        plugin = PluginDefinition(
            name="p",
            version="1.0.0",
            hooks={"on_error": lambda error, context: errors.append((error, context))},
        )
        builder = _builder(presenter, answers="n\n", config=_config(plugins=(plugin,)))

        with pytest.raises(SystemExit) as exc_info:
            builder.run("demo", "missing", output=tmp_path)

        assert exc_info.value.code == 1
        presenter.show_error.assert_called_once_with("Template 'missing' not found")
        assert [context for _, context in errors] == ["run"]
        assert not (tmp_path / "demo").exists()

    def test_validation_failure(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that answers failing validation stop the run."""
        config = _config(prompts=PROMPTS[:1], custom_validators={})
        builder = _builder(presenter, config=config)

        with pytest.raises(ValidationError, match="Template selection is required"):
            asyncio.run(builder.run_async("demo", output=tmp_path))

    def test_custom_validator_failure_exits(
        self, presenter: MagicMock, tmp_path: Path
    ) -> None:
        """Test that a custom validator rejecting an answer exits 1."""
        config = _config(custom_validators={"project_name": validators.project_name})
        builder = _builder(presenter, config=config)

        with pytest.raises(SystemExit):
            builder.run("bad name", "basic", yes=True, output=tmp_path)

        presenter.show_error.assert_called_once_with(
            "Project name can only contain letters, numbers, hyphens, and underscores"
        )

    def test_unexpected_error_reported(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that non-CLI errors are reported generically."""

        def _post_install(path: Path, answers: dict[str, Any]) -> None:
            raise RuntimeError("hook exploded")

        template = TemplateDefinition(
            name="basic", description="", post_install=_post_install
        )
        builder = _builder(presenter, config=_config(templates=(template, OTHER)))

        with pytest.raises(SystemExit):
            builder.run("demo", "basic", yes=True, output=tmp_path)

        presenter.show_error.assert_called_once_with("An error occurred: hook exploded")

    def test_end_of_input_exits(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that running out of input is a reported failure."""
        builder = _builder(presenter, answers="")

        with pytest.raises(SystemExit):
            builder.run("demo", output=tmp_path)

        presenter.show_error.assert_called_once_with("End of input reached")


class TestCommand:
    """Tests for the generated click command."""

    def test_version(self, presenter: MagicMock) -> None:
        """Test that --version prints the CLI name and version."""
        result = CliRunner().invoke(_builder(presenter).command(), ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == "create-app 1.0.0"

    def test_runs_with_options(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that arguments and options reach the run."""
        builder = _builder(presenter)

        result = CliRunner().invoke(
            builder.command(),
            ["demo", "--template", "other", "--yes", "--output", str(tmp_path)],
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "demo" / "package.json").exists()

    def test_failure_exit_code(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that a failed run exits with status 1."""
        builder = _builder(presenter)

        result = CliRunner().invoke(
            builder.command(), ["demo", "-t", "missing", "-y", "-o", str(tmp_path)]
        )

        assert result.exit_code == 1

    def test_mode_option(self, presenter: MagicMock, tmp_path: Path) -> None:
        """Test that --mode stream reads answers from stdin."""
        builder = CLIBuilder(_config(), settings=Settings(), presenter=presenter)
        builder.generator.runner = MagicMock(spec=ProcessRunner)

        result = CliRunner().invoke(
            builder.command(),
            ["--mode", "stream", "-o", str(tmp_path)],
            input="demo\n2\nn\n",
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "demo").is_dir()
        assert builder.reader.mode == "stream"


@pytest.fixture
def no_config_files(tmp_path: Path) -> Iterator[Path]:
    """Point both settings files at paths that do not exist."""
    missing = tmp_path / "missing.yaml"
    with (
        patch("cliforge.config.loader.get_home_config_path", return_value=missing),
        patch("cliforge.config.loader.get_local_config_path", return_value=missing),
    ):
        yield tmp_path


class TestCreateCli:
    """Tests for create_cli settings resolution."""

    def test_author_settings_survive_without_config_files(
        self, no_config_files: Path
    ) -> None:
        """Test that CLIConfig options win when no settings file sets them."""
        builder = create_cli(
            _config(
                skip_install=True,
                install_command="pnpm install",
                theme="dark",
                readline_mode="stream",
                allow_mode_selection=True,
            )
        )

        assert builder.settings.skip_install is True
        assert builder.settings.install_command == "pnpm install"
        assert builder.settings.theme == "dark"
        assert builder.settings.readline_mode == "stream"
        assert builder.settings.allow_mode_selection is True
        assert builder.generator.install_command == "pnpm install"
        assert builder.presenter.theme is THEMES["dark"]

    def test_theme_object_survives_without_config_files(
        self, no_config_files: Path
    ) -> None:
        """Test that a Theme object in CLIConfig is used."""
        custom = Theme(primary="#111111")

        builder = create_cli(_config(theme=custom))

        assert builder.presenter.theme is custom

    def test_unset_options_use_defaults(self, no_config_files: Path) -> None:
        """Test that options set nowhere fall back to built-in defaults."""
        builder = create_cli(_config())

        assert builder.settings.skip_install is False
        assert builder.install_command == "npm install"
        assert builder.settings.readline_mode == "prompt"
        assert builder.presenter.theme is THEMES["default"]

    def test_config_file_overrides_author_settings(self, tmp_path: Path) -> None:
        """Test that a settings file wins over CLIConfig options."""
        local = tmp_path / "local.yaml"
        local.write_text("theme: minimal\n", encoding="utf-8")

        with (
            patch(
                "cliforge.config.loader.get_home_config_path",
                return_value=tmp_path / "missing.yaml",
            ),
            patch("cliforge.config.loader.get_local_config_path", return_value=local),
        ):
            builder = create_cli(_config(theme="dark", skip_install=True))

        assert builder.settings.theme == "minimal"
        assert builder.settings.skip_install is True
        assert builder.presenter.theme is THEMES["minimal"]
