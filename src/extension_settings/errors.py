"""Error types for extension settings.

The interactive widgets never raise; these exceptions are used by the
settings store, the registration phase, and configuration loading.
"""


class ExtensionSettingsError(Exception):
    """Base exception for all extension settings errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidDefinitionError(ExtensionSettingsError, ValueError):
    """Raised when a setting definition is malformed."""

    def __init__(self, setting_id: str, reason: str):
        super().__init__(
            f"Setting '{setting_id}': {reason}",
            {"setting_id": setting_id, "reason": reason},
        )
        self.setting_id = setting_id


class NamespaceAlreadyRegisteredError(ExtensionSettingsError, ValueError):
    """Raised when a namespace registers its settings twice."""

    def __init__(self, namespace: str):
        super().__init__(
            f"Namespace '{namespace}' already registered",
            {"namespace": namespace},
        )
        self.namespace = namespace


class RegistrationClosedError(ExtensionSettingsError):
    """Raised when registering after the registration phase was sealed."""

    def __init__(self, namespace: str):
        super().__init__(
            f"Cannot register '{namespace}': registration is closed",
            {"namespace": namespace},
        )
        self.namespace = namespace


class SettingValidationError(ExtensionSettingsError, ValueError):
    """Raised by the typed store when a value is rejected."""

    def __init__(self, namespace: str, key: str, reason: str):
        super().__init__(
            f"Invalid value for {namespace}.{key}: {reason}",
            {"namespace": namespace, "key": key, "reason": reason},
        )
        self.namespace = namespace
        self.key = key
        self.reason = reason


class ConfigError(ExtensionSettingsError):
    """Raised when the application config cannot be loaded."""

    def __init__(self, path, reason: str):
        super().__init__(
            f"Failed to load config from {path}: {reason}",
            {"path": str(path), "reason": reason},
        )
        self.path = path
