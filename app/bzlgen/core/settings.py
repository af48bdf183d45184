"""Emitter settings loaded from the user configuration file.

Settings live in the ``[emitter]`` table of ``config.toml`` inside the
XDG configuration directory. A missing file means defaults.
"""

import logging
import tomllib
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bzlgen.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when the settings content is invalid."""


class GlobStyle(str, Enum):
    """How ``glob`` calls are written.

    Attributes:
        KEYWORD: Always ``glob(include = [...], exclude = [...])``.
        POSITIONAL: ``glob([...])`` when there are no excludes, otherwise
            the keyword form.
    """

    KEYWORD = "keyword"
    POSITIONAL = "positional"


class EmitterSettings(BaseModel):
    """Options controlling Starlark output.

    Attributes:
        glob_style: Form used for ``glob`` calls.
        indent_width: Spaces per indentation level in multi-line output.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    glob_style: Annotated[GlobStyle, Field(description="Form used for glob calls")] = (
        GlobStyle.KEYWORD
    )
    indent_width: Annotated[
        int,
        Field(ge=1, le=8, description="Spaces per indentation level"),
    ] = 4


def load_settings(path: Path | None = None) -> EmitterSettings:
    """Load emitter settings from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated EmitterSettings, or defaults when the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the ``[emitter]`` table is invalid.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return EmitterSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    emitter = data.get("emitter", {})
    if not isinstance(emitter, dict):
        raise SettingsValidationError(f"'emitter' must be a table in {settings_path}")

    try:
        settings = EmitterSettings.model_validate(emitter)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {settings_path}: {e}") from e

    logger.debug("Loaded settings from %s: %s", settings_path, settings)
    return settings
