"""Ordered multi-select panel.

Displays a list of options that can be toggled on/off and reordered.
Selected options are listed first, in selection order, with their
position number; unselected options follow in declaration order. The
result is the comma-separated ids of the selected options, in order.

Ids in the initial value that match no option are kept, unseen, at their
positions and are included in the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..settings.codec import join_ordered_value, parse_ordered_value
from ..settings.schema import OrderedListOption
from .component import scroll_window
from .keybindings import EditorAction, EditorKeybindings, get_editor_keybindings
from .keys import matches_key
from .text import truncate_to_width
from .theme import SettingsListTheme

logger = logging.getLogger(__name__)

HINT = "  Space toggle · Shift+↑/↓ reorder · Enter confirm · Esc cancel"


@dataclass
class _DisplayItem:
    option: OrderedListOption
    selected: bool
    # 1-based position among displayed selected items, 0 if unselected
    position: int


class OrderedMultiSelect:
    """Pick and order a subset of options.

    Args:
        options: Candidate options, in declaration order.
        current_value: Comma-separated ids selected initially.
        theme: Styling shared with the settings list.
        done: Called once with the comma-joined result on confirm, or
            None on cancel.
        keybindings: Keybindings to use (process-wide ones when None).
        max_visible: Maximum option rows shown at once (None shows all).
    """

    def __init__(
        self,
        options: Sequence[OrderedListOption],
        current_value: str,
        theme: SettingsListTheme,
        done: Callable[[Optional[str]], None],
        keybindings: Optional[EditorKeybindings] = None,
        max_visible: Optional[int] = None,
    ) -> None:
        self._options = list(options)
        self._options_by_id = {option.id: option for option in self._options}
        # Keep first occurrence of repeated ids
        self._selected: List[str] = list(dict.fromkeys(parse_ordered_value(current_value)))
        self._cursor_index = 0
        self._theme = theme
        self._done = done
        self._keybindings = keybindings
        self._max_visible = max_visible

    @property
    def selected(self) -> Tuple[str, ...]:
        """Selected ids in order, including ids that match no option."""
        return tuple(self._selected)

    @property
    def value(self) -> str:
        """The comma-joined result that confirm would report."""
        return join_ordered_value(self._selected)

    @property
    def cursor_index(self) -> int:
        return self._cursor_index

    def invalidate(self) -> None:
        pass

    def render(self, width: int) -> List[str]:
        lines: List[str] = []
        items = self._build_display_items()
        cursor = self._clamped_cursor(len(items))
        start, end = scroll_window(cursor, len(items), self._max_visible)

        for i in range(start, end):
            item = items[i]
            is_cursor = i == cursor
            prefix = self._theme.cursor if is_cursor else "  "

            if item.selected:
                marker = self._theme.value(f"✓ {item.position:>2}", is_cursor)
            else:
                marker = self._theme.label("    ", is_cursor)

            label = self._theme.label(item.option.label, is_cursor)
            lines.append(truncate_to_width(f"{prefix}{marker}  {label}", width, "…"))

        if items:
            scroll_text = f"  ({cursor + 1}/{len(items)})"
            lines.append(self._theme.hint(truncate_to_width(scroll_text, width, "")))

        lines.append("")
        lines.append(self._theme.hint(truncate_to_width(HINT, width, "")))
        return lines

    def handle_input(self, data: str) -> None:
        kb = self._keybindings or get_editor_keybindings()
        items = self._build_display_items()

        if not items:
            if kb.matches(data, EditorAction.SELECT_CANCEL):
                self._finish(None)
            return

        self._cursor_index = self._clamped_cursor(len(items))

        if kb.matches(data, EditorAction.SELECT_UP) or matches_key(data, "up"):
            self._cursor_index = (self._cursor_index - 1) % len(items)
        elif kb.matches(data, EditorAction.SELECT_DOWN) or matches_key(data, "down"):
            self._cursor_index = (self._cursor_index + 1) % len(items)
        elif data == " ":
            self._toggle_current(items)
        elif matches_key(data, "shift+up"):
            self._move(items, -1)
        elif matches_key(data, "shift+down"):
            self._move(items, 1)
        elif kb.matches(data, EditorAction.SELECT_CONFIRM):
            self._finish(self.value)
        elif kb.matches(data, EditorAction.SELECT_CANCEL):
            self._finish(None)

    def _finish(self, value: Optional[str]) -> None:
        if value is None:
            logger.debug("Ordered selection cancelled")
        else:
            logger.debug(f"Ordered selection confirmed: {value!r}")
        self._done(value)

    def _clamped_cursor(self, count: int) -> int:
        if count == 0:
            return 0
        return min(max(self._cursor_index, 0), count - 1)

    def _build_display_items(self) -> List[_DisplayItem]:
        items: List[_DisplayItem] = []

        # Selected options first, in selection order
        for selected_id in self._selected:
            option = self._options_by_id.get(selected_id)
            if option is not None:
                items.append(_DisplayItem(option, True, len(items) + 1))

        # Unselected options, in declaration order
        chosen = set(self._selected)
        for option in self._options:
            if option.id not in chosen:
                items.append(_DisplayItem(option, False, 0))

        return items

    def _toggle_current(self, items: List[_DisplayItem]) -> None:
        item = items[self._cursor_index]
        option_id = item.option.id
        if item.selected:
            self._selected.remove(option_id)
        else:
            # Newly selected options always go last
            self._selected.append(option_id)

    def _move(self, items: List[_DisplayItem], direction: int) -> None:
        """Swap the cursor item with its displayed selected neighbour."""
        item = items[self._cursor_index]
        if not item.selected:
            return

        visible = [entry.option.id for entry in items if entry.selected]
        index = item.position - 1
        target = index + direction
        if target < 0 or target >= len(visible):
            return

        a = self._selected.index(visible[index])
        b = self._selected.index(visible[target])
        self._selected[a], self._selected[b] = self._selected[b], self._selected[a]
        # Selected rows are displayed first, so the cursor follows by one row
        self._cursor_index += direction
