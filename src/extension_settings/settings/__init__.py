"""Extension settings store.

This package holds the setting definitions announced by extensions and the
values stored for them, with namespace isolation per extension.

Example usage:
    from extension_settings.settings import SettingDefinition, SettingsManager

    settings = SettingsManager(config_dir=Path("~/.config/extension-settings"))

    # Registration phase
    settings.register("my-extension", [
        SettingDefinition("timeout", "Timeout", "30", values=["10", "30", "60"]),
        SettingDefinition("projectName", "Project Name"),
    ])
    settings.seal()

    # Get/set values
    timeout = settings.get("my-extension", "timeout", "30")
    settings.set("my-extension", "timeout", "60")
"""

from .codec import decode_bool, encode_value, join_ordered_value, parse_ordered_value
from .manager import (
    RegisteredNamespace,
    SettingsManager,
    get_settings_manager,
    init_settings_manager,
)
from .registration import (
    ENTRY_POINT_GROUP,
    load_definitions_file,
    register_entry_points,
    register_from_file,
)
from .schema import OrderedListOption, SettingDefinition, definition_from_dict
from .storage import SETTINGS_FILE_NAME, YamlStorage
from .store import TypedSettingsStore, create_settings_store_factory

__all__ = [
    # Schema types
    "SettingDefinition",
    "OrderedListOption",
    "definition_from_dict",
    # Manager
    "SettingsManager",
    "RegisteredNamespace",
    "get_settings_manager",
    "init_settings_manager",
    # Registration
    "ENTRY_POINT_GROUP",
    "load_definitions_file",
    "register_from_file",
    "register_entry_points",
    # Storage
    "SETTINGS_FILE_NAME",
    "YamlStorage",
    # Typed store
    "TypedSettingsStore",
    "create_settings_store_factory",
    # Value encoding
    "encode_value",
    "decode_bool",
    "parse_ordered_value",
    "join_ordered_value",
]
