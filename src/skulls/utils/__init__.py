"""Utilities package."""

from skulls.utils.config import ConfigStore, UserConfig, default_config_path
from skulls.utils.logging import setup_logging

__all__ = [
    "ConfigStore",
    "UserConfig",
    "default_config_path",
    "setup_logging",
]
