"""Semantic editor actions and the keys bound to them."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from .keys import normalize_key_id, parse_key


class EditorAction(str, Enum):
    """Actions understood by the list widgets and the text input."""

    SELECT_UP = "select_up"
    SELECT_DOWN = "select_down"
    SELECT_CONFIRM = "select_confirm"
    SELECT_CANCEL = "select_cancel"
    CURSOR_LEFT = "cursor_left"
    CURSOR_RIGHT = "cursor_right"
    CURSOR_LINE_START = "cursor_line_start"
    CURSOR_LINE_END = "cursor_line_end"
    DELETE_CHAR_BACKWARD = "delete_char_backward"
    DELETE_CHAR_FORWARD = "delete_char_forward"
    DELETE_WORD_BACKWARD = "delete_word_backward"
    DELETE_TO_LINE_START = "delete_to_line_start"
    DELETE_TO_LINE_END = "delete_to_line_end"


DEFAULT_KEYBINDINGS: Dict[EditorAction, List[str]] = {
    EditorAction.SELECT_UP: ["up"],
    EditorAction.SELECT_DOWN: ["down"],
    EditorAction.SELECT_CONFIRM: ["enter"],
    EditorAction.SELECT_CANCEL: ["escape", "c-c"],
    EditorAction.CURSOR_LEFT: ["left", "c-b"],
    EditorAction.CURSOR_RIGHT: ["right", "c-f"],
    EditorAction.CURSOR_LINE_START: ["home", "c-a"],
    EditorAction.CURSOR_LINE_END: ["end", "c-e"],
    EditorAction.DELETE_CHAR_BACKWARD: ["backspace"],
    EditorAction.DELETE_CHAR_FORWARD: ["delete", "c-d"],
    EditorAction.DELETE_WORD_BACKWARD: ["c-w"],
    EditorAction.DELETE_TO_LINE_START: ["c-u"],
    EditorAction.DELETE_TO_LINE_END: ["c-k"],
}


class EditorKeybindings:
    """Map of editor actions to key ids.

    Args:
        overrides: Optional replacement key lists per action. Actions not
            overridden keep their defaults.
    """

    def __init__(self, overrides: Optional[Mapping[EditorAction | str, Iterable[str]]] = None) -> None:
        self._bindings: Dict[EditorAction, List[str]] = {
            action: [normalize_key_id(k) for k in keys]
            for action, keys in DEFAULT_KEYBINDINGS.items()
        }
        for action, keys in (overrides or {}).items():
            self._bindings[EditorAction(action)] = [normalize_key_id(k) for k in keys]

    def matches(self, data: str, action: EditorAction | str) -> bool:
        """Check whether a raw input token triggers an action."""
        key = parse_key(data)
        if key is None:
            return False
        return key in self._bindings.get(EditorAction(action), [])

    def get_keys(self, action: EditorAction | str) -> List[str]:
        """Get the key ids bound to an action."""
        return list(self._bindings.get(EditorAction(action), []))


_editor_keybindings: Optional[EditorKeybindings] = None


def get_editor_keybindings() -> EditorKeybindings:
    """Get the process-wide keybindings (defaults until configured)."""
    global _editor_keybindings
    if _editor_keybindings is None:
        _editor_keybindings = EditorKeybindings()
    return _editor_keybindings


def set_editor_keybindings(keybindings: Optional[EditorKeybindings]) -> None:
    """Replace the process-wide keybindings (None restores defaults)."""
    global _editor_keybindings
    _editor_keybindings = keybindings
