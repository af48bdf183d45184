"""Unit tests for emitter settings."""

from pathlib import Path

import pytest
from bzlgen.core.settings import (
    EmitterSettings,
    GlobStyle,
    SettingsError,
    SettingsParseError,
    SettingsValidationError,
    load_settings,
)


class TestEmitterSettings:
    """Tests for the EmitterSettings model."""

    def test_defaults(self) -> None:
        """Defaults are keyword globs and four-space indentation."""
        settings = EmitterSettings()
        assert settings.glob_style is GlobStyle.KEYWORD
        assert settings.indent_width == 4

    def test_glob_style_from_string(self) -> None:
        """glob_style accepts its string value."""
        settings = EmitterSettings.model_validate({"glob_style": "positional"})
        assert settings.glob_style is GlobStyle.POSITIONAL

    @pytest.mark.parametrize("width", [0, 9])
    def test_indent_width_bounds(self, width: int) -> None:
        """indent_width must be between 1 and 8."""
        with pytest.raises(ValueError):
            EmitterSettings(indent_width=width)

    def test_extra_fields_forbidden(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValueError):
            EmitterSettings.model_validate({"line_length": 100})

    def test_frozen(self) -> None:
        """Settings cannot be changed after creation."""
        settings = EmitterSettings()
        with pytest.raises(ValueError):
            settings.indent_width = 2  # type: ignore[misc]


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing settings file means defaults."""
        assert load_settings(tmp_path / "missing.toml") == EmitterSettings()

    def test_default_path_is_used(self, isolated_config_home: Path) -> None:
        """Without a path, config.toml in the config directory is read."""
        config_dir = isolated_config_home / "bzlgen"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text('[emitter]\nglob_style = "positional"\n')

        assert load_settings().glob_style is GlobStyle.POSITIONAL

    def test_loads_emitter_table(self, tmp_path: Path) -> None:
        """Values come from the [emitter] table."""
        path = tmp_path / "config.toml"
        path.write_text("[emitter]\nindent_width = 2\n")

        settings = load_settings(path)
        assert settings.indent_width == 2
        assert settings.glob_style is GlobStyle.KEYWORD

    def test_missing_emitter_table(self, tmp_path: Path) -> None:
        """A file without [emitter] gives defaults."""
        path = tmp_path / "config.toml"
        path.write_text('[other]\nkey = "value"\n')

        assert load_settings(path) == EmitterSettings()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises SettingsParseError."""
        path = tmp_path / "config.toml"
        path.write_text("[emitter\n")

        with pytest.raises(SettingsParseError, match="Invalid TOML syntax"):
            load_settings(path)

    def test_emitter_not_a_table(self, tmp_path: Path) -> None:
        """[emitter] must be a table."""
        path = tmp_path / "config.toml"
        path.write_text('emitter = "keyword"\n')

        with pytest.raises(SettingsValidationError, match="must be a table"):
            load_settings(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        """Invalid values raise SettingsValidationError."""
        path = tmp_path / "config.toml"
        path.write_text('[emitter]\nglob_style = "sideways"\n')

        with pytest.raises(SettingsValidationError, match="Invalid settings"):
            load_settings(path)

    def test_errors_share_base_class(self) -> None:
        """Every settings error is a SettingsError."""
        assert issubclass(SettingsParseError, SettingsError)
        assert issubclass(SettingsValidationError, SettingsError)
