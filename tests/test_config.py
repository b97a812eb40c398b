"""Tests for settings loading and merging."""

from pathlib import Path
from unittest.mock import patch

import pytest

from cliforge.config import (
    DEFAULT_SETTINGS,
    Settings,
    get_home_config_path,
    get_local_config_path,
    load_settings,
    load_user_settings,
)
from cliforge.config.loader import load_yaml_config
from cliforge.errors import ConfigurationError


class TestSettings:
    """Tests for the Settings dataclass."""

    def test_default_settings_values(self) -> None:
        """Test that DEFAULT_SETTINGS has expected values."""
        assert DEFAULT_SETTINGS.theme == "default"
        assert DEFAULT_SETTINGS.readline_mode == "prompt"
        assert DEFAULT_SETTINGS.allow_mode_selection is False
        assert DEFAULT_SETTINGS.skip_install is False
        assert DEFAULT_SETTINGS.install_command == "npm install"
        assert DEFAULT_SETTINGS.output_root == "."

    def test_merge_prefers_other_values(self) -> None:
        """Test that merge prefers values from 'other' when set."""
        merged = Settings(theme="dark", skip_install=False).merge(
            Settings(theme="minimal", skip_install=True)
        )

        assert merged.theme == "minimal"
        assert merged.skip_install is True

    def test_merge_preserves_base_when_other_is_none(self) -> None:
        """Test that None in 'other' does not override."""
        merged = Settings(theme="dark", install_command="pnpm install").merge(
            Settings(theme="vibrant")
        )

        assert merged.theme == "vibrant"
        assert merged.install_command == "pnpm install"

    def test_merge_returns_new_instance(self) -> None:
        """Test that merge does not mutate either side."""
        base = Settings(theme="dark")
        override = Settings(skip_install=True)
        merged = base.merge(override)

        assert merged is not base
        assert base.skip_install is None
        assert override.theme is None

    def test_to_dict_excludes_none(self) -> None:
        """Test that unset values are not serialized."""
        assert Settings(theme="dark", skip_install=False).to_dict() == {
            "theme": "dark",
            "skip_install": False,
        }

    def test_from_dict(self) -> None:
        """Test that from_dict reads known keys and ignores others."""
        settings = Settings.from_dict(
            {"theme": "dark", "readline_mode": "stream", "skip_install": True, "bogus": 1}
        )

        assert settings.theme == "dark"
        assert settings.readline_mode == "stream"
        assert settings.skip_install is True
        assert settings.install_command is None

    def test_from_dict_rejects_unknown_mode(self) -> None:
        """Test that an unknown readline mode is a configuration error."""
        with pytest.raises(ConfigurationError, match="Invalid readline_mode 'async'"):
            Settings.from_dict({"readline_mode": "async"})


class TestConfigLoader:
    """Tests for settings file loading."""

    def test_get_home_config_path(self, tmp_path: Path) -> None:
        """Test the global config location."""
        with patch("cliforge.config.loader.Path.home", return_value=tmp_path):
            assert get_home_config_path() == tmp_path / ".cliforge" / "config.yaml"

    def test_get_local_config_path(self, tmp_path: Path) -> None:
        """Test the local config location."""
        with patch("cliforge.config.loader.Path.cwd", return_value=tmp_path):
            assert get_local_config_path() == tmp_path / ".cliforge" / "config.yaml"

    def test_load_yaml_config_returns_dict(self, tmp_path: Path) -> None:
        """Test reading a YAML mapping."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("theme: dark\n", encoding="utf-8")

        assert load_yaml_config(config_file) == {"theme": "dark"}

    def test_load_yaml_config_missing_or_empty(self, tmp_path: Path) -> None:
        """Test that missing and empty files give None."""
        config_file = tmp_path / "config.yaml"
        assert load_yaml_config(config_file) is None

        config_file.write_text("", encoding="utf-8")
        assert load_yaml_config(config_file) is None

    def test_load_yaml_config_malformed(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that malformed YAML is ignored with a warning."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("theme: [dark\n", encoding="utf-8")

        assert load_yaml_config(config_file) is None
        assert "Ignoring malformed config" in caplog.text

    def test_load_settings_local_overrides_home(self, tmp_path: Path) -> None:
        """Test precedence: defaults < home < local."""
        home = tmp_path / "home.yaml"
        local = tmp_path / "local.yaml"
        home.write_text("theme: dark\ninstall_command: yarn\n", encoding="utf-8")
        local.write_text("theme: minimal\n", encoding="utf-8")

        with (
            patch("cliforge.config.loader.get_home_config_path", return_value=home),
            patch("cliforge.config.loader.get_local_config_path", return_value=local),
        ):
            settings = load_settings()

        assert settings.theme == "minimal"
        assert settings.install_command == "yarn"
        assert settings.readline_mode == "prompt"

    def test_load_settings_defaults_without_files(self, tmp_path: Path) -> None:
        """Test that no files means built-in defaults."""
        with (
            patch(
                "cliforge.config.loader.get_home_config_path",
                return_value=tmp_path / "none.yaml",
            ),
            patch(
                "cliforge.config.loader.get_local_config_path",
                return_value=tmp_path / "none.yaml",
            ),
        ):
            assert load_settings() == DEFAULT_SETTINGS

    def test_load_user_settings_without_files_is_unset(self, tmp_path: Path) -> None:
        """Test that no files leaves every field unset."""
        with (
            patch(
                "cliforge.config.loader.get_home_config_path",
                return_value=tmp_path / "none.yaml",
            ),
            patch(
                "cliforge.config.loader.get_local_config_path",
                return_value=tmp_path / "none.yaml",
            ),
        ):
            assert load_user_settings() == Settings()

    def test_load_user_settings_keeps_only_file_values(self, tmp_path: Path) -> None:
        """Test that file values are merged without built-in defaults."""
        home = tmp_path / "home.yaml"
        local = tmp_path / "local.yaml"
        home.write_text("install_command: yarn\n", encoding="utf-8")
        local.write_text("skip_install: true\n", encoding="utf-8")

        with (
            patch("cliforge.config.loader.get_home_config_path", return_value=home),
            patch("cliforge.config.loader.get_local_config_path", return_value=local),
        ):
            settings = load_user_settings()

        assert settings == Settings(install_command="yarn", skip_install=True)
