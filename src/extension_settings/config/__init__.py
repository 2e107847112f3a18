"""Configuration management for extension settings."""

from .settings import (
    AppConfig,
    KeybindingsConfig,
    StorageConfig,
    UIConfig,
)
from .loader import get_config, load_config, reset_config

__all__ = [
    "AppConfig",
    "KeybindingsConfig",
    "StorageConfig",
    "UIConfig",
    "get_config",
    "load_config",
    "reset_config",
]
