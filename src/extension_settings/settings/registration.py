"""Registration sources for extension setting definitions.

Extensions announce their settings either in a YAML definitions file or
through a Python entry point. Both sources feed SettingsManager.register()
during the registration phase, before the manager is sealed.

Definitions file format:
    my-extension:
      - id: timeout
        label: Timeout
        default: "30"
        values: ["10", "30", "60"]
      - id: providers
        label: Providers
        options:
          - {id: github, label: GitHub}
          - {id: gitlab, label: GitLab}

Entry points in the ``extension_settings.register`` group must resolve to a
callable taking the SettingsManager.
"""

import logging
from importlib.metadata import entry_points
from pathlib import Path
from typing import Dict, List

import yaml

from ..errors import ExtensionSettingsError, InvalidDefinitionError
from .manager import SettingsManager
from .schema import SettingDefinition, definition_from_dict

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "extension_settings.register"


def load_definitions_file(path: Path) -> Dict[str, List[SettingDefinition]]:
    """Load setting definitions from a YAML file.

    Args:
        path: Path to the definitions file.

    Returns:
        Mapping of namespace -> definitions, in file order. Empty if the
        file does not exist.

    Raises:
        InvalidDefinitionError: If the file or a definition is malformed.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidDefinitionError(str(path), f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise InvalidDefinitionError(str(path), "top level must map extension names to lists")

    result: Dict[str, List[SettingDefinition]] = {}
    for namespace, raw_definitions in data.items():
        if not isinstance(raw_definitions, list):
            raise InvalidDefinitionError(str(namespace), "settings must be a list")
        result[str(namespace)] = [definition_from_dict(raw) for raw in raw_definitions]
    return result


def register_from_file(manager: SettingsManager, path: Path) -> List[str]:
    """Register every namespace found in a definitions file.

    Args:
        manager: The SettingsManager to register into.
        path: Path to the definitions file.

    Returns:
        Names of the registered namespaces.
    """
    registered = []
    for namespace, definitions in load_definitions_file(path).items():
        manager.register(namespace, definitions)
        registered.append(namespace)
    if registered:
        logger.debug(f"Registered {len(registered)} namespaces from {path}")
    return registered


def register_entry_points(manager: SettingsManager, group: str = ENTRY_POINT_GROUP) -> List[str]:
    """Run every registration entry point in a group.

    A failing entry point is logged and skipped so that one broken
    extension does not hide the settings of the others.

    Args:
        manager: The SettingsManager passed to each entry point.
        group: Entry point group name.

    Returns:
        Names of the entry points that ran successfully.
    """
    loaded = []
    for entry_point in entry_points(group=group):
        try:
            register = entry_point.load()
            register(manager)
        except ExtensionSettingsError as e:
            logger.warning(f"Settings registration '{entry_point.name}' rejected: {e}")
            continue
        except Exception:
            logger.exception(f"Settings registration '{entry_point.name}' failed")
            continue
        loaded.append(entry_point.name)
    return loaded
