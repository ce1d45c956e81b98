"""User configuration for skulls."""

from pathlib import Path
from typing import Callable

import typer
from pydantic import BaseModel, ConfigDict

APP_NAME = "skulls"
CONFIG_FILENAME = "config.json"

ConfigPathProvider = Callable[[], Path]


def default_config_path() -> Path:
    """Platform-specific location of the config file."""
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILENAME


class UserConfig(BaseModel):
    """Persisted user settings."""

    model_config = ConfigDict(extra="ignore")

    dir: str | None = None


class ConfigStore:
    """
    Reads and writes the user config file.

    The file location comes from ``path_provider`` so tests and embedders can
    point it elsewhere. A missing file or blank value means "not configured".
    """

    def __init__(self, path_provider: ConfigPathProvider = default_config_path):
        self.path_provider = path_provider

    @property
    def path(self) -> Path:
        return self.path_provider()

    def load(self) -> UserConfig:
        """
        Load the config file.

        Returns:
            UserConfig, empty if the file doesn't exist

        Raises:
            ValidationError: If the file isn't valid JSON for UserConfig
        """
        path = self.path
        if not path.exists():
            return UserConfig()
        return UserConfig.model_validate_json(path.read_text(encoding="utf-8"))

    def save(self, config: UserConfig) -> Path:
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            config.model_dump_json(indent=2, exclude_none=True) + "\n",
            encoding="utf-8",
        )
        return path

    def get_install_dir(self) -> str | None:
        """Configured default install directory, or None."""
        value = (self.load().dir or "").strip()
        return value or None

    def set_install_dir(self, directory: str) -> str:
        """
        Persist the default install directory.

        Args:
            directory: Directory to store (whitespace is trimmed)

        Returns:
            The stored value

        Raises:
            ValueError: If the directory is blank
        """
        directory = directory.strip()
        if not directory:
            raise ValueError("dir must be non-empty")
        self.save(UserConfig(dir=directory))
        return directory
