"""Terminal widgets for browsing and editing settings."""

from .component import Container, Panel, Text, scroll_window
from .fuzzy import fuzzy_filter, fuzzy_match
from .input import TextInput
from .items import (
    HEADER_PREFIX,
    CyclingItem,
    FreeTextItem,
    HeaderItem,
    SettingItem,
    SubmenuItem,
    header_id,
    is_header,
    make_setting_item,
)
from .keybindings import (
    EditorAction,
    EditorKeybindings,
    get_editor_keybindings,
    set_editor_keybindings,
)
from .keys import matches_key, normalize_key_id, parse_key
from .ordered_multi_select import OrderedMultiSelect
from .settings_list import ListMode, SettingsList, SettingsListOptions
from .terminal import TerminalRunner
from .text import strip_ansi, truncate_to_width, visible_width, wrap_text_with_ansi
from .theme import CLIColors, SettingsListTheme, bold, default_theme

__all__ = [
    "HEADER_PREFIX",
    "CLIColors",
    "Container",
    "CyclingItem",
    "EditorAction",
    "EditorKeybindings",
    "FreeTextItem",
    "HeaderItem",
    "ListMode",
    "OrderedMultiSelect",
    "Panel",
    "SettingItem",
    "SettingsList",
    "SettingsListOptions",
    "SettingsListTheme",
    "SubmenuItem",
    "TerminalRunner",
    "Text",
    "TextInput",
    "bold",
    "default_theme",
    "fuzzy_filter",
    "fuzzy_match",
    "get_editor_keybindings",
    "header_id",
    "is_header",
    "make_setting_item",
    "matches_key",
    "normalize_key_id",
    "parse_key",
    "scroll_window",
    "set_editor_keybindings",
    "strip_ansi",
    "truncate_to_width",
    "visible_width",
    "wrap_text_with_ansi",
]
