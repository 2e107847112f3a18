"""Settings manager with per-extension namespaces.

This module provides the SettingsManager class, which holds the setting
definitions announced by extensions and the values stored for them.
Registration is an explicit phase: extensions register their definitions,
the manager is sealed, and only then is any settings UI built.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..errors import NamespaceAlreadyRegisteredError, RegistrationClosedError
from .schema import SettingDefinition
from .storage import SETTINGS_FILE_NAME, YamlStorage

logger = logging.getLogger(__name__)


ChangeListener = Callable[[str, str, str], None]


@dataclass
class RegisteredNamespace:
    """Metadata for a registered extension namespace.

    Attributes:
        name: Unique extension name (e.g., "my-extension").
        display_name: Human-readable name for the UI.
        definitions: Setting definitions, in announcement order.
        order: Display order in UI (lower = first, ties sorted by name).
    """

    name: str
    display_name: str
    definitions: List[SettingDefinition]
    definitions_by_id: Dict[str, SettingDefinition] = field(default_factory=dict)
    order: int = 100


class SettingsManager:
    """Settings store and registry for extension settings.

    Example:
        settings = SettingsManager(config_dir=Path("~/.config/extension-settings"))

        settings.register("my-extension", [
            SettingDefinition("timeout", "Timeout", "30", values=["10", "30", "60"]),
        ])
        settings.seal()

        timeout = settings.get("my-extension", "timeout")
        settings.set("my-extension", "timeout", "60")

        settings.on_change(lambda ns, key, val: print(f"{ns}.{key} = {val}"))
    """

    def __init__(
        self,
        config_dir: Path,
        auto_save: bool = True,
        filename: str = SETTINGS_FILE_NAME,
    ):
        """Initialize the settings manager.

        Args:
            config_dir: Directory containing the settings file.
            auto_save: If True, persist every change immediately.
            filename: Name of the YAML settings file.
        """
        self._config_dir = Path(config_dir).expanduser()
        self._auto_save = auto_save
        self._storage = YamlStorage(self._config_dir / filename)

        self._namespaces: Dict[str, RegisteredNamespace] = {}
        self._sealed = False

        # Stored values (namespace -> {id: value})
        self._values: Dict[str, Dict[str, str]] = {}

        self._listeners: List[ChangeListener] = []

        # External validators: "namespace:id" -> callable(value) -> Optional[str]
        self._validators: Dict[str, Callable[[str], Optional[str]]] = {}

        self._load()

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self._config_dir

    @property
    def storage_path(self) -> Path:
        """Get the settings file path."""
        return self._storage.path

    # ─────────────────────────────────────────────────────────────────
    # Registration
    # ─────────────────────────────────────────────────────────────────

    def register(
        self,
        namespace: str,
        definitions: List[SettingDefinition],
        display_name: Optional[str] = None,
        order: int = 100,
    ) -> None:
        """Register an extension namespace with its setting definitions.

        Args:
            namespace: Unique extension name.
            definitions: Setting definitions for the extension.
            display_name: Name shown in the UI (defaults to namespace).
            order: Display order in UI (lower = first).

        Raises:
            RegistrationClosedError: If the manager has been sealed.
            NamespaceAlreadyRegisteredError: If namespace is already registered.
        """
        if self._sealed:
            raise RegistrationClosedError(namespace)
        if namespace in self._namespaces:
            raise NamespaceAlreadyRegisteredError(namespace)

        self._namespaces[namespace] = RegisteredNamespace(
            name=namespace,
            display_name=display_name or namespace,
            definitions=list(definitions),
            definitions_by_id={d.id: d for d in definitions},
            order=order,
        )
        logger.debug(
            f"Registered settings namespace: {namespace} ({len(definitions)} settings)"
        )

    def seal(self) -> None:
        """Close the registration phase.

        Idempotent. After sealing, register() raises RegistrationClosedError.
        """
        if not self._sealed:
            self._sealed = True
            logger.debug(f"Registration sealed with {len(self._namespaces)} namespaces")

    @property
    def is_sealed(self) -> bool:
        """Check whether the registration phase is closed."""
        return self._sealed

    def is_registered(self, namespace: str) -> bool:
        """Check if a namespace is registered."""
        return namespace in self._namespaces

    def get_namespaces(self) -> List[RegisteredNamespace]:
        """Get all registered namespaces, sorted by order then name."""
        return sorted(self._namespaces.values(), key=lambda ns: (ns.order, ns.name))

    def get_namespace(self, namespace: str) -> Optional[RegisteredNamespace]:
        """Get a specific registered namespace."""
        return self._namespaces.get(namespace)

    def get_definitions(self, namespace: str) -> List[SettingDefinition]:
        """Get the definitions for a namespace.

        Raises:
            KeyError: If namespace not registered.
        """
        if namespace not in self._namespaces:
            raise KeyError(f"Namespace '{namespace}' not registered")
        return self._namespaces[namespace].definitions

    def get_definition(self, namespace: str, key: str) -> Optional[SettingDefinition]:
        """Get a specific setting definition, or None."""
        ns = self._namespaces.get(namespace)
        if ns is None:
            return None
        return ns.definitions_by_id.get(key)

    # ─────────────────────────────────────────────────────────────────
    # Value Access
    # ─────────────────────────────────────────────────────────────────

    def get(self, namespace: str, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a setting value.

        Args:
            namespace: The extension namespace.
            key: The setting id.
            default: Value to return if nothing is stored.

        Returns:
            The stored value, else default, else the registered default,
            else None.
        """
        ns_values = self._values.get(namespace, {})
        if key in ns_values:
            return ns_values[key]
        if default is not None:
            return default
        definition = self.get_definition(namespace, key)
        if definition is not None:
            return definition.default
        return None

    def get_all(self, namespace: str) -> Dict[str, str]:
        """Get all effective values for a namespace, defaults included."""
        values: Dict[str, str] = {}
        ns = self._namespaces.get(namespace)
        if ns is not None:
            values.update({d.id: d.default for d in ns.definitions})
        values.update(self._values.get(namespace, {}))
        return values

    def set(self, namespace: str, key: str, value: str, skip_validation: bool = False) -> Optional[str]:
        """Set a setting value.

        Args:
            namespace: The extension namespace.
            key: The setting id.
            value: The new value.
            skip_validation: If True, skip definition and external validation.

        Returns:
            Validation error message if rejected (the stored value is then
            unchanged), None if successful.
        """
        if not skip_validation:
            error = self._validate(namespace, key, value)
            if error:
                logger.debug(f"Rejected {namespace}.{key}={value!r}: {error}")
                return error

        old_value = self.get(namespace, key)
        self._values.setdefault(namespace, {})[key] = value

        if self._auto_save:
            self._storage.set(namespace, key, value)

        if old_value != value:
            self._emit_change(namespace, key, value)

        return None

    def reset_to_default(self, namespace: str, key: str) -> None:
        """Reset a setting to its registered default."""
        definition = self.get_definition(namespace, key)
        if definition is not None:
            self.set(namespace, key, definition.default, skip_validation=True)

    def reset_namespace(self, namespace: str) -> None:
        """Reset all settings in a namespace to their defaults."""
        ns = self._namespaces.get(namespace)
        if ns is None:
            return
        for definition in ns.definitions:
            self.set(namespace, definition.id, definition.default, skip_validation=True)

    def register_validator(
        self,
        namespace: str,
        key: str,
        validator: Callable[[str], Optional[str]],
    ) -> None:
        """Register an external validator for a setting.

        Args:
            namespace: The extension namespace.
            key: The setting id.
            validator: Callback accepting value, returning error string or None.
        """
        self._validators[f"{namespace}:{key}"] = validator

    def _validate(self, namespace: str, key: str, value: str) -> Optional[str]:
        """Run definition and external validation for a value."""
        definition = self.get_definition(namespace, key)
        if definition is not None:
            error = definition.validate(value)
            if error:
                return error

        validator = self._validators.get(f"{namespace}:{key}")
        if validator is not None:
            try:
                return validator(value)
            except Exception as e:
                logger.error(f"External validator failed for {namespace}.{key}: {e}")
                return str(e)
        return None

    # ─────────────────────────────────────────────────────────────────
    # Events
    # ─────────────────────────────────────────────────────────────────

    def on_change(self, callback: ChangeListener) -> None:
        """Register a callback for setting changes.

        Args:
            callback: Function(namespace, key, value) called on changes.
        """
        self._listeners.append(callback)

    def remove_listener(self, callback: ChangeListener) -> None:
        """Remove a change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _emit_change(self, namespace: str, key: str, value: str) -> None:
        """Notify all listeners of a change."""
        # Snapshot so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(namespace, key, value)
            except Exception as e:
                logger.warning(f"Settings listener error: {e}")

    # ─────────────────────────────────────────────────────────────────
    # Persistence
    # ─────────────────────────────────────────────────────────────────

    def _load(self) -> None:
        """Load values from YAML storage."""
        self._values = self._storage.load()
        logger.debug(f"Loaded settings from {self._storage.path}")

    def save(self) -> None:
        """Persist all values to storage. Useful when auto_save=False."""
        self._storage.save(self._values)

    def reload(self) -> None:
        """Reload values from storage, discarding unsaved changes."""
        self._values.clear()
        self._load()


# Global instance for singleton pattern (optional)
_global_settings: Optional[SettingsManager] = None


def get_settings_manager() -> Optional[SettingsManager]:
    """Get the global settings manager instance, or None if not initialized."""
    return _global_settings


def init_settings_manager(config_dir: Path, **kwargs) -> SettingsManager:
    """Initialize the global settings manager.

    Args:
        config_dir: Directory containing the settings file.
        **kwargs: Additional arguments for SettingsManager.

    Returns:
        The initialized SettingsManager.
    """
    global _global_settings
    _global_settings = SettingsManager(config_dir, **kwargs)
    return _global_settings
