"""Interactive panel contract and simple composition helpers."""

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple, runtime_checkable

from .text import truncate_to_width, wrap_text_with_ansi


@runtime_checkable
class Panel(Protocol):
    """Anything that renders to lines and consumes raw input tokens.

    Both list widgets implement this; a parent holding a child panel
    forwards render and input to it.
    """

    def render(self, width: int) -> List[str]:
        """Render to lines no wider than width. Must not change state."""
        ...

    def handle_input(self, data: str) -> None:
        """Consume one raw input token."""
        ...

    def invalidate(self) -> None:
        """Drop any cached render state."""
        ...


class Text:
    """Static wrapped text with optional horizontal and vertical padding.

    Args:
        text: Text to show (may contain ANSI styling).
        padding_x: Columns of padding on the left.
        padding_y: Blank lines above and below.
    """

    def __init__(self, text: str = "", padding_x: int = 0, padding_y: int = 0) -> None:
        self._text = text
        self._padding_x = padding_x
        self._padding_y = padding_y

    def set_text(self, text: str) -> None:
        """Replace the text."""
        self._text = text

    def render(self, width: int) -> List[str]:
        if not self._text:
            return []
        pad = " " * self._padding_x
        inner = max(1, width - self._padding_x * 2)
        blank = [""] * self._padding_y
        body = [pad + line for line in wrap_text_with_ansi(self._text, inner)]
        return blank + body + blank

    def handle_input(self, data: str) -> None:
        pass

    def invalidate(self) -> None:
        pass


class Container:
    """Vertical stack of panels. Input is not routed; owners forward it."""

    def __init__(self) -> None:
        self._children: List[Panel] = []

    def add_child(self, child: Panel) -> None:
        """Append a panel to the stack."""
        self._children.append(child)

    def render(self, width: int) -> List[str]:
        lines: List[str] = []
        for child in self._children:
            lines.extend(truncate_to_width(line, width) for line in child.render(width))
        return lines

    def handle_input(self, data: str) -> None:
        pass

    def invalidate(self) -> None:
        for child in self._children:
            child.invalidate()


def scroll_window(selected: int, total: int, max_visible: Optional[int]) -> Tuple[int, int]:
    """Compute the visible [start, end) window for a scrolling list.

    The window is centered on selected and clamped to the list bounds.

    Args:
        selected: Index of the selected row.
        total: Number of rows.
        max_visible: Maximum rows shown (None shows all).
    """
    if max_visible is None or max_visible >= total:
        return 0, total
    max_visible = max(1, max_visible)
    start = max(0, min(selected - max_visible // 2, total - max_visible))
    return start, min(start + max_visible, total)
