"""Interactive settings menu for all registered extensions.

Builds one settings list with a header row per extension namespace and a
row per setting, and writes committed changes back to the settings
manager. Rejected values are reverted in the list and the reason is shown
below it.

Usage:
    extension-settings menu
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from ..config import AppConfig, get_config
from ..settings import SettingDefinition, SettingsManager
from ..tui import (
    CLIColors,
    Container,
    EditorKeybindings,
    OrderedMultiSelect,
    SettingItem,
    SettingsList,
    SettingsListOptions,
    SettingsListTheme,
    TerminalRunner,
    Text,
    bold,
    default_theme,
    header_id,
    make_setting_item,
)
from ..tui.items import HEADER_PREFIX, SubmenuFactory

logger = logging.getLogger(__name__)

TITLE = "Extension Settings"
NO_SETTINGS_MESSAGE = "No extensions have registered settings"
ID_SEPARATOR = "::"


def setting_item_id(namespace: str, key: str) -> str:
    """Row id for a setting: "namespace::key"."""
    return f"{namespace}{ID_SEPARATOR}{key}"


def parse_setting_item_id(item_id: str) -> Optional[Tuple[str, str]]:
    """Split a row id into (namespace, key), or None for headers and junk."""
    if item_id.startswith(HEADER_PREFIX):
        return None
    namespace, sep, key = item_id.partition(ID_SEPARATOR)
    if not sep or not namespace or not key:
        return None
    return namespace, key


def _ordered_submenu(
    definition: SettingDefinition,
    theme: SettingsListTheme,
    keybindings: Optional[EditorKeybindings],
    max_visible: Optional[int],
) -> SubmenuFactory:
    def factory(current_value: str, done: Callable[[Optional[str]], None]) -> OrderedMultiSelect:
        return OrderedMultiSelect(
            definition.options or [],
            current_value,
            theme,
            done,
            keybindings=keybindings,
            max_visible=max_visible,
        )

    return factory


def build_items(
    manager: SettingsManager,
    theme: SettingsListTheme,
    keybindings: Optional[EditorKeybindings] = None,
    max_visible: Optional[int] = None,
    colors: Optional[CLIColors] = None,
) -> List[SettingItem]:
    """Build the grouped rows for every registered namespace.

    Args:
        manager: Settings manager holding definitions and values.
        theme: Theme handed to ordered-list submenus.
        keybindings: Keybindings handed to ordered-list submenus.
        max_visible: Row limit for ordered-list submenus.
        colors: Palette for header labels (None for plain headers).
    """
    items: List[SettingItem] = []

    for namespace in manager.get_namespaces():
        header_label = bold(namespace.display_name, colors) if colors else namespace.display_name
        items.append(make_setting_item(header_id(namespace.name), header_label))

        for definition in namespace.definitions:
            current = manager.get(namespace.name, definition.id)
            if current is None:
                current = definition.default

            submenu = None
            if definition.kind == "ordered":
                submenu = _ordered_submenu(definition, theme, keybindings, max_visible)

            items.append(
                make_setting_item(
                    setting_item_id(namespace.name, definition.id),
                    f"  {definition.label}",
                    current,
                    description=definition.description or None,
                    values=definition.values,
                    submenu=submenu,
                )
            )

    return items


class SettingsMenu:
    """Title, settings list and status line for all extension settings.

    Creating the menu seals the manager's registration phase.

    Args:
        manager: Settings manager to read from and write to.
        config: Application config (the loaded global config when None).
        on_close: Called when the user cancels out of the list.
        keybindings: Keybindings override for the list and its submenus.
    """

    def __init__(
        self,
        manager: SettingsManager,
        config: Optional[AppConfig] = None,
        on_close: Optional[Callable[[], None]] = None,
        keybindings: Optional[EditorKeybindings] = None,
    ) -> None:
        config = config or get_config()
        manager.seal()

        self._manager = manager
        self._on_close = on_close
        self._closed = False
        self._status_text = ""
        self._colors = CLIColors() if config.ui.color else None

        theme = default_theme(self._colors, enabled=config.ui.color, cursor=config.ui.cursor)
        items = build_items(manager, theme, keybindings, config.ui.max_visible, self._colors)

        self._title = Text(bold(TITLE, self._colors) if self._colors else TITLE, 1, 1)
        self._status = Text("", padding_x=2)
        self._list = SettingsList(
            items,
            min(len(items) + 2, config.ui.max_visible),
            theme,
            self._handle_change,
            self.close,
            SettingsListOptions(enable_search=config.ui.enable_search),
            keybindings,
        )

        self._container = Container()
        self._container.add_child(self._title)
        self._container.add_child(self._list)
        self._container.add_child(self._status)

        manager.on_change(self._handle_store_change)

    @property
    def settings_list(self) -> SettingsList:
        return self._list

    @property
    def status(self) -> str:
        """Text of the status line (empty when there is nothing to report)."""
        return self._status_text

    @property
    def closed(self) -> bool:
        return self._closed

    def render(self, width: int) -> List[str]:
        return self._container.render(width)

    def handle_input(self, data: str) -> None:
        self._list.handle_input(data)

    def invalidate(self) -> None:
        self._container.invalidate()

    def close(self) -> None:
        """Stop listening to the manager and report closing."""
        if self._closed:
            return
        self._closed = True
        self._manager.remove_listener(self._handle_store_change)
        if self._on_close is not None:
            self._on_close()

    def _set_status(self, text: str) -> None:
        self._status_text = text
        if text and self._colors:
            text = f"{self._colors.red}{text}{self._colors.reset}"
        self._status.set_text(text)

    def _handle_change(self, item_id: str, value: str) -> None:
        parsed = parse_setting_item_id(item_id)
        if parsed is None:
            return
        namespace, key = parsed

        previous = self._manager.get(namespace, key)
        error = self._manager.set(namespace, key, value)
        if error:
            logger.warning(f"Rejected {namespace}.{key}={value!r}: {error}")
            self._list.update_value(item_id, previous if previous is not None else "")
            self._set_status(f"{namespace}.{key}: {error}")
        else:
            self._set_status("")

    def _handle_store_change(self, namespace: str, key: str, value: str) -> None:
        self._list.update_value(setting_item_id(namespace, key), value)


def run_interactive_menu(
    manager: SettingsManager,
    config: Optional[AppConfig] = None,
    keybindings: Optional[EditorKeybindings] = None,
) -> int:
    """Run the settings menu in the terminal until the user leaves it.

    Args:
        manager: Settings manager with registered namespaces.
        config: Application config.
        keybindings: Keybindings override.

    Returns:
        Exit code (0 on success).
    """
    if not manager.get_namespaces():
        print(NO_SETTINGS_MESSAGE)
        return 0

    runner: Optional[TerminalRunner] = None

    def on_close() -> None:
        if runner is not None:
            runner.stop()

    menu = SettingsMenu(manager, config, on_close=on_close, keybindings=keybindings)
    runner = TerminalRunner(menu)
    asyncio.run(runner.run())
    return 0
