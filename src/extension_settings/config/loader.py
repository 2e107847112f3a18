"""Configuration file loader."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigError
from .settings import AppConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EXTENSION_SETTINGS_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/extension-settings/config.yaml")

# Global config instance
_config: Optional[AppConfig] = None


def _expand_env_vars(obj):
    """Recursively expand ${VAR} patterns in strings."""
    if isinstance(obj, str):
        # Handle ${VAR} pattern
        if obj.startswith("${") and obj.endswith("}"):
            var_name = obj[2:-1]
            return os.environ.get(var_name, "")
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj


def default_config_path() -> Path:
    """Config path from EXTENSION_SETTINGS_CONFIG, else the user config dir."""
    configured = os.environ.get(CONFIG_ENV_VAR)
    return Path(configured or DEFAULT_CONFIG_PATH).expanduser()


def load_config(
    config_path: Optional[Path] = None,
    env_path: Optional[Path] = None,
) -> AppConfig:
    """Load configuration from YAML file and environment.

    Args:
        config_path: Path to config.yaml (default: $EXTENSION_SETTINGS_CONFIG
            or ~/.config/extension-settings/config.yaml)
        env_path: Path to .env file (default: .env)

    Returns:
        Loaded AppConfig instance

    Raises:
        ConfigError: If the file exists but cannot be parsed or validated.
    """
    global _config

    # Load .env file if it exists
    if env_path is None:
        env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    # Load config.yaml
    config_data = {}
    if config_path is None:
        config_path = default_config_path()

    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(config_path, str(e)) from e
        if not isinstance(config_data, dict):
            raise ConfigError(config_path, "top level must be a mapping")
        logger.debug(f"Loaded config from {config_path}")

    # Expand environment variables
    config_data = _expand_env_vars(config_data)

    try:
        _config = AppConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(config_path, str(e)) from e

    return _config


def get_config() -> AppConfig:
    """Get the current config instance.

    Loads default config if not yet loaded.
    """
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> None:
    """Reset config to None (for testing)."""
    global _config
    _config = None
