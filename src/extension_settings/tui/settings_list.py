"""Interactive settings list.

Browse rows with the select keys; Enter or Space activates the selected
row. What activation does depends on the row variant:

- cycling items advance to the next allowed value,
- free-text items open an inline editor (Enter commits, Esc discards),
- submenu items open a child panel that receives all input until it
  reports a value or cancels,
- headers do nothing.

With search enabled, any other typed text narrows the rows with a fuzzy
match on their labels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .component import Panel, scroll_window
from .fuzzy import fuzzy_filter
from .input import TextInput
from .items import CyclingItem, FreeTextItem, SettingItem, SubmenuItem, is_header
from .keybindings import EditorAction, EditorKeybindings, get_editor_keybindings
from .keys import matches_key
from .text import truncate_to_width, visible_width, wrap_text_with_ansi
from .theme import SettingsListTheme

logger = logging.getLogger(__name__)

MAX_LABEL_WIDTH = 30
SEPARATOR = "  "

HINT_EDITING = "  Enter to confirm · Esc to cancel"
HINT_SEARCH = "  Type to search · Enter/Space to change · Esc to cancel"
HINT_PLAIN = "  Enter/Space to change · Esc to cancel"

EMPTY_MESSAGE = "  No settings available"
NO_MATCH_MESSAGE = "  No matching settings"


class ListMode(Enum):
    """Which part of the list currently receives input."""

    BROWSING = "browsing"
    EDITING = "editing"
    SUBMENU = "submenu"


@dataclass
class SettingsListOptions:
    """Optional behavior of a SettingsList."""

    enable_search: bool = False


class SettingsList:
    """Settings list panel.

    Args:
        items: Rows to show. The list updates their current_value in place.
        max_visible: Maximum rows shown at once.
        theme: Styling callbacks.
        on_change: Called with (id, value) after every committed change.
        on_cancel: Called when the user cancels while browsing.
        options: Optional behavior (search).
        keybindings: Keybindings to use (process-wide ones when None).
    """

    def __init__(
        self,
        items: Sequence[SettingItem],
        max_visible: int,
        theme: SettingsListTheme,
        on_change: Callable[[str, str], None],
        on_cancel: Callable[[], None],
        options: Optional[SettingsListOptions] = None,
        keybindings: Optional[EditorKeybindings] = None,
    ) -> None:
        self._items: List[SettingItem] = list(items)
        self._filtered: List[SettingItem] = self._items
        self._max_visible = max(1, max_visible)
        self._theme = theme
        self._on_change = on_change
        self._on_cancel = on_cancel
        self._keybindings = keybindings
        self._search_enabled = (options or SettingsListOptions()).enable_search
        self._search_input = TextInput(keybindings=keybindings) if self._search_enabled else None

        self._selected_index = 0
        self._mode = ListMode.BROWSING
        self._label_width: Optional[int] = None

        # Editing state
        self._editor: Optional[TextInput] = None
        self._editing_item: Optional[SettingItem] = None

        # Submenu state
        self._submenu: Optional[Panel] = None

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> ListMode:
        return self._mode

    @property
    def selected_index(self) -> int:
        """Index of the selected row within display_items."""
        return self._selected_index

    @property
    def display_items(self) -> List[SettingItem]:
        """Rows currently navigable (after search filtering)."""
        return list(self._filtered)

    @property
    def search_query(self) -> str:
        return self._search_input.get_value() if self._search_input else ""

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    def update_value(self, id: str, value: str) -> None:
        """Change a row's displayed value without reporting it.

        Used when the backing store changes out of band. Unknown ids are
        ignored.
        """
        for item in self._items:
            if item.id == id:
                item.current_value = value
                return

    def invalidate(self) -> None:
        self._label_width = None
        if self._submenu is not None:
            self._submenu.invalidate()

    def render(self, width: int) -> List[str]:
        if self._submenu is not None:
            return self._submenu.render(width)
        return self._render_list(width)

    def handle_input(self, data: str) -> None:
        if self._mode is ListMode.EDITING:
            self._handle_editing_input(data)
            return

        if self._mode is ListMode.SUBMENU and self._submenu is not None:
            self._submenu.handle_input(data)
            return

        kb = self._keybindings or get_editor_keybindings()
        count = len(self._filtered)

        if kb.matches(data, EditorAction.SELECT_UP):
            if count:
                self._selected_index = (self._selected_index - 1) % count
        elif kb.matches(data, EditorAction.SELECT_DOWN):
            if count:
                self._selected_index = (self._selected_index + 1) % count
        elif kb.matches(data, EditorAction.SELECT_CONFIRM) or data == " ":
            self._activate()
        elif kb.matches(data, EditorAction.SELECT_CANCEL):
            logger.debug("Settings list cancelled")
            self._on_cancel()
        elif self._search_input is not None:
            sanitized = data.replace(" ", "")
            if not sanitized:
                return
            self._search_input.handle_input(sanitized)
            self._apply_filter(self._search_input.get_value())

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _max_label_width(self) -> int:
        if self._label_width is None:
            widths = [visible_width(item.label) for item in self._items]
            self._label_width = min(MAX_LABEL_WIDTH, max(widths, default=0))
        return self._label_width

    def _render_list(self, width: int) -> List[str]:
        lines: List[str] = []

        if self._search_input is not None and self._mode is not ListMode.EDITING:
            lines.extend(self._search_input.render(width))
            lines.append("")

        if not self._items:
            lines.append(self._theme.hint(EMPTY_MESSAGE))
            if self._search_enabled:
                self._add_hint_line(lines)
            return lines

        display = self._filtered
        if not display:
            lines.append(self._theme.hint(NO_MATCH_MESSAGE))
            self._add_hint_line(lines)
            return lines

        start, end = scroll_window(self._selected_index, len(display), self._max_visible)
        label_width = self._max_label_width()

        for i in range(start, end):
            item = display[i]
            is_selected = i == self._selected_index
            prefix = self._theme.cursor if is_selected else "  "

            label = truncate_to_width(item.label, label_width, "")
            padded = label + " " * max(0, label_width - visible_width(label))
            label_text = self._theme.label(padded, is_selected)

            used = visible_width(prefix) + label_width + visible_width(SEPARATOR)
            value_width = width - used - 2

            if self._editor is not None and item is self._editing_item:
                rendered = self._editor.render(max(1, value_width))
                value_text = rendered[0] if rendered else ""
            else:
                value_text = self._theme.value(
                    truncate_to_width(item.current_value, value_width, ""), is_selected
                )
            lines.append(prefix + label_text + SEPARATOR + value_text)

        if start > 0 or end < len(display):
            scroll_text = f"  ({self._selected_index + 1}/{len(display)})"
            lines.append(self._theme.hint(truncate_to_width(scroll_text, width - 2, "")))

        selected = display[self._selected_index]
        if selected.description and self._mode is not ListMode.EDITING:
            lines.append("")
            for line in wrap_text_with_ansi(selected.description, width - 4):
                lines.append(self._theme.description(f"  {line}"))

        self._add_hint_line(lines)
        return lines

    def _add_hint_line(self, lines: List[str]) -> None:
        lines.append("")
        if self._mode is ListMode.EDITING:
            lines.append(self._theme.hint(HINT_EDITING))
        elif self._search_enabled:
            lines.append(self._theme.hint(HINT_SEARCH))
        else:
            lines.append(self._theme.hint(HINT_PLAIN))

    # -------------------------------------------------------------------------
    # Activation
    # -------------------------------------------------------------------------

    def _activate(self) -> None:
        if not self._filtered:
            return
        item = self._filtered[self._selected_index]
        if is_header(item):
            return

        if isinstance(item, SubmenuItem):
            self._open_submenu(item)
        elif isinstance(item, CyclingItem):
            value = item.next_value()
            item.current_value = value
            logger.debug(f"Cycled '{item.id}' to {value!r}")
            self._on_change(item.id, value)
        elif isinstance(item, FreeTextItem):
            self._editor = TextInput(item.current_value, prompt="", keybindings=self._keybindings)
            self._editing_item = item
            self._mode = ListMode.EDITING
            logger.debug(f"Editing '{item.id}'")

    def _handle_editing_input(self, data: str) -> None:
        if self._editor is None:
            return

        if matches_key(data, "enter"):
            item = self._editing_item
            value = self._editor.get_value()
            self._end_editing()
            if item is not None:
                item.current_value = value
                logger.debug(f"Committed '{item.id}' = {value!r}")
                self._on_change(item.id, value)
        elif matches_key(data, "escape"):
            logger.debug("Edit discarded")
            self._end_editing()
        else:
            self._editor.handle_input(data)

    def _end_editing(self) -> None:
        self._editor = None
        self._editing_item = None
        self._mode = ListMode.BROWSING

    def _open_submenu(self, item: SubmenuItem) -> None:
        origin = self._selected_index
        closed = False

        def done(value: Optional[str]) -> None:
            nonlocal closed
            if closed:
                return
            closed = True
            if value is not None:
                item.current_value = value
                logger.debug(f"Submenu set '{item.id}' = {value!r}")
                self._on_change(item.id, value)
            else:
                logger.debug(f"Submenu for '{item.id}' cancelled")
            self._close_submenu(origin)

        child = item.submenu(item.current_value, done)
        if closed:
            return
        self._submenu = child
        self._mode = ListMode.SUBMENU
        logger.debug(f"Opened submenu for '{item.id}'")

    def _close_submenu(self, origin: int) -> None:
        self._submenu = None
        self._mode = ListMode.BROWSING
        if self._filtered:
            self._selected_index = min(origin, len(self._filtered) - 1)

    def _apply_filter(self, query: str) -> None:
        self._filtered = fuzzy_filter(self._items, query, lambda item: item.label)
        self._selected_index = 0
        logger.debug(f"Search {query!r} matched {len(self._filtered)} of {len(self._items)}")
