"""Configuration loading from force-update.toml or pyproject.toml."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import ConfigError
from .platform import PlatformKind

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "force-update.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_SECTION = "force-update"


class ForceUpdateConfig(BaseModel):
    """Static settings of the forced update check.

    Attributes:
        ios_app_store_id: App Store identifier, empty disables iOS prompts.
        android_package_name: Play Store package name, None to use the
            installed package identifier.
        allow_cancel: Whether the update prompt may be dismissed.
        platform: Forces a platform instead of detecting it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    ios_app_store_id: str = ""
    android_package_name: str | None = None
    allow_cancel: bool = False
    platform: PlatformKind | None = None


def find_config_file(start: Path | None = None) -> Path | None:
    """Find the configuration file in a directory.

    force-update.toml wins over pyproject.toml. A pyproject.toml is only
    used if it has a [tool.force-update] section.

    Args:
        start: Directory to look in, defaults to the current directory.

    Returns:
        Path to the configuration file, or None if there is none.
    """
    directory = start or Path.cwd()
    config_file = directory / CONFIG_FILENAME
    if config_file.is_file():
        return config_file

    pyproject = directory / PYPROJECT_FILENAME
    if pyproject.is_file() and _read_section(pyproject) is not None:
        return pyproject
    return None


def load_config(path: Path | None = None) -> ForceUpdateConfig:
    """Load the configuration.

    Args:
        path: Configuration file or directory to search. Defaults to the
            current directory.

    Returns:
        Loaded configuration, or the defaults if no file is found.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if path is not None and path.is_file():
        config_file: Path | None = path
    elif path is not None and not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    else:
        config_file = find_config_file(path)

    if config_file is None:
        logger.debug("No configuration file found, using defaults")
        return ForceUpdateConfig()

    section = _read_section(config_file)
    if section is None:
        raise ConfigError(
            f"No [{_section_name(config_file)}] section in {config_file}"
        )

    try:
        config = ForceUpdateConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e

    logger.debug("Loaded configuration from %s", config_file)
    return config


def _section_name(config_file: Path) -> str:
    if config_file.name == PYPROJECT_FILENAME:
        return f"tool.{CONFIG_SECTION}"
    return CONFIG_SECTION


def _read_section(config_file: Path) -> dict[str, Any] | None:
    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_file}: {e}") from e

    if config_file.name == PYPROJECT_FILENAME:
        data = data.get("tool", {})
    section = data.get(CONFIG_SECTION)
    return section if isinstance(section, dict) else None
