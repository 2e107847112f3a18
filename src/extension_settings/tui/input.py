"""Single-line text input used for search and free-text editing."""

from __future__ import annotations

from typing import List, Optional

from prompt_toolkit.utils import get_cwidth

from .keybindings import EditorAction, EditorKeybindings, get_editor_keybindings
from .keys import is_printable
from .text import truncate_to_width

CURSOR_ON = "\x1b[7m"
CURSOR_OFF = "\x1b[27m"


class TextInput:
    """Editable one-line buffer with a cursor.

    Printable tokens (including pasted text) are inserted at the cursor;
    editing keys come from the editor keybindings. Unrecognized control
    tokens are ignored.

    Args:
        value: Initial text; the cursor starts at its end.
        prompt: Prefix rendered before the text.
        keybindings: Keybindings to use (process-wide ones when None).
    """

    def __init__(
        self,
        value: str = "",
        prompt: str = "> ",
        keybindings: Optional[EditorKeybindings] = None,
    ) -> None:
        self._value = value
        self._cursor = len(value)
        self._prompt = prompt
        self._keybindings = keybindings

    @property
    def cursor(self) -> int:
        """Cursor position as an index into the value."""
        return self._cursor

    def get_value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        """Replace the text and move the cursor to the end."""
        self._value = value
        self._cursor = len(value)

    def invalidate(self) -> None:
        pass

    def handle_input(self, data: str) -> None:
        kb = self._keybindings or get_editor_keybindings()
        value, cursor = self._value, self._cursor

        if kb.matches(data, EditorAction.CURSOR_LEFT):
            self._cursor = max(0, cursor - 1)
        elif kb.matches(data, EditorAction.CURSOR_RIGHT):
            self._cursor = min(len(value), cursor + 1)
        elif kb.matches(data, EditorAction.CURSOR_LINE_START):
            self._cursor = 0
        elif kb.matches(data, EditorAction.CURSOR_LINE_END):
            self._cursor = len(value)
        elif kb.matches(data, EditorAction.DELETE_CHAR_BACKWARD):
            if cursor > 0:
                self._value = value[: cursor - 1] + value[cursor:]
                self._cursor = cursor - 1
        elif kb.matches(data, EditorAction.DELETE_CHAR_FORWARD):
            self._value = value[:cursor] + value[cursor + 1 :]
        elif kb.matches(data, EditorAction.DELETE_WORD_BACKWARD):
            start = cursor
            while start > 0 and value[start - 1] == " ":
                start -= 1
            while start > 0 and value[start - 1] != " ":
                start -= 1
            self._value = value[:start] + value[cursor:]
            self._cursor = start
        elif kb.matches(data, EditorAction.DELETE_TO_LINE_START):
            self._value = value[cursor:]
            self._cursor = 0
        elif kb.matches(data, EditorAction.DELETE_TO_LINE_END):
            self._value = value[:cursor]
        elif is_printable(data):
            self._value = value[:cursor] + data + value[cursor:]
            self._cursor = cursor + len(data)

    def render(self, width: int) -> List[str]:
        available = max(1, width - get_cwidth(self._prompt))
        value, cursor = self._value, self._cursor

        # Scroll horizontally so the cursor cell stays visible
        start = 0
        while start < cursor and get_cwidth(value[start:cursor]) + 1 > available:
            start += 1

        before = value[start:cursor]
        at = value[cursor] if cursor < len(value) else " "
        remaining = available - get_cwidth(before) - get_cwidth(at)
        after = truncate_to_width(value[cursor + 1 :], remaining, "") if remaining > 0 else ""

        return [self._prompt + before + CURSOR_ON + at + CURSOR_OFF + after]
