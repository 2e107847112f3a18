"""YAML file storage for extension settings.

Settings are stored as a two-level mapping of extension namespace to
setting id to string value.

Example file structure:
    my-extension:
      timeout: "30"
      providers: "github,gitlab"
    other-extension:
      theme: dark
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .codec import encode_value

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings-extensions.yaml"


class YamlStorage:
    """YAML file storage for extension settings.

    Values are always written as strings. Scalars of other types found in
    a hand-edited file are encoded to strings when loaded.
    """

    def __init__(self, path: Path):
        """Initialize YAML storage.

        Args:
            path: Path to the YAML file.
        """
        self._path = path

    @property
    def path(self) -> Path:
        """Get the storage file path."""
        return self._path

    def load(self) -> Dict[str, Dict[str, str]]:
        """Load all settings from the YAML file.

        Returns:
            Dictionary of namespace -> {setting id: value}. Empty if the
            file is missing or unreadable.
        """
        if not self._path.exists():
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load settings from {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self._path}: not a mapping")
            return {}

        return self._normalize(data)

    def save(self, data: Dict[str, Dict[str, Any]]) -> None:
        """Save all settings to the YAML file.

        Args:
            data: Dictionary of namespace -> {setting id: value}.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self._normalize(data),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        logger.debug(f"Saved settings to {self._path}")

    def set(self, namespace: str, key: str, value: Any) -> None:
        """Set a single value (loads, modifies, saves).

        Args:
            namespace: The extension namespace.
            key: The setting id.
            value: The value to set.
        """
        data = self.load()
        if namespace not in data:
            data[namespace] = {}
        data[namespace][key] = encode_value(value)
        self.save(data)

    def _normalize(self, data: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
        """Coerce a loaded mapping into namespace -> {id: str}."""
        result: Dict[str, Dict[str, str]] = {}
        for namespace, ns_data in data.items():
            if not isinstance(ns_data, dict):
                logger.warning(
                    f"Ignoring settings for '{namespace}' in {self._path}: not a mapping"
                )
                continue
            result[str(namespace)] = {
                str(key): encode_value(value) for key, value in ns_data.items()
            }
        return result
