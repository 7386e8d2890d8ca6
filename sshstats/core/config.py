"""
Configuration Management.

Loads host-level defaults from config/settings/*.yaml and environment
overrides from SSHSTATS_* variables (or config/.env).

Settings (YAML):
    collector.yaml - SSH user/port/identity, cache directory, poll interval,
                     status URL, fetch and command timeouts, debug flag
    logging.yaml   - Logging configuration

Environment:
    SSHSTATS_CONFIG_DIR - Directory holding the YAML files (overrides discovery)
    SSHSTATS_DEBUG      - Force debug behaviour regardless of collector.yaml

The settings directory is config/settings/ below the project root, found
through the .project_root marker from the working directory first and then
from the installed package location. A missing directory or a missing file
means built-in defaults apply; a present but invalid file is fatal.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sshstats.core.config_schema import CollectorSchema, LoggingSchema
from sshstats.core.exceptions import ConfigurationError

PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent


def find_project_root(start: Path | None = None) -> Path:
    """Find project root by looking for .project_root marker file."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


class Settings(BaseSettings):
    """Environment overrides. Only values that vary per deployment, never defaults."""

    config_dir: str | None = None
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SSHSTATS_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings. Reads config/.env when a project root exists."""
    for start in (Path.cwd(), PACKAGE_ROOT):
        try:
            env_path = find_project_root(start) / "config" / ".env"
        except RuntimeError:
            continue
        if env_path.is_file():
            return Settings(_env_file=str(env_path))
    return Settings()


def get_settings_dir() -> Path | None:
    """
    Resolve the directory holding the YAML settings files.

    Returns:
        The configured or discovered directory, or None when there is none.
    """
    settings = get_settings()
    if settings.config_dir:
        return Path(settings.config_dir)

    for start in (Path.cwd(), PACKAGE_ROOT):
        try:
            settings_dir = find_project_root(start) / "config" / "settings"
        except RuntimeError:
            continue
        if settings_dir.is_dir():
            return settings_dir
    return None


def load_yaml_config(filename: str, settings_dir: Path | None = None) -> dict[str, Any]:
    """
    Load a YAML configuration file from the settings directory.

    Raises:
        FileNotFoundError: If there is no settings directory or no such file.
        ConfigurationError: If the file is not valid YAML or not a mapping.
    """
    base = settings_dir if settings_dir is not None else get_settings_dir()
    if base is None:
        raise FileNotFoundError(f"Configuration file not found: {filename}")

    config_path = base / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping in {config_path}")
    return data


def _load_validated(schema_cls: type, filename: str, settings_dir: Path | None) -> Any:
    """Load YAML and validate against schema. Falls back to schema defaults if absent."""
    try:
        raw = load_yaml_config(filename, settings_dir)
    except FileNotFoundError:
        return schema_cls()
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Unknown fields or wrong types raise ConfigurationError immediately.
    The environment debug override is folded into the collector settings
    here so callers only ever see one immutable CollectorSchema.
    """

    def __init__(self, settings_dir: Path | None = None, debug: bool = False) -> None:
        self._settings_dir = settings_dir
        collector = _load_validated(CollectorSchema, "collector.yaml", settings_dir)
        if debug and not collector.debug:
            collector = collector.model_copy(update={"debug": True})
        self._collector = collector
        self._logging = _load_validated(LoggingSchema, "logging.yaml", settings_dir)

    @property
    def settings_dir(self) -> Path | None:
        """Directory the YAML files were read from, if any."""
        return self._settings_dir

    @property
    def collector(self) -> CollectorSchema:
        """Collector settings."""
        return self._collector

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig(settings_dir=get_settings_dir(), debug=get_settings().debug)
