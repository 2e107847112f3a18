"""Rows of the settings list.

Each row is one of four variants, and the variant decides what activating
the row does: a cycling item steps through fixed values, a free-text item
opens the inline editor, a submenu item opens a child panel, and a header
item does nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Union

from .component import Panel

HEADER_PREFIX = "__header__"

SubmenuDone = Callable[[Optional[str]], None]
SubmenuFactory = Callable[[str, SubmenuDone], Panel]


@dataclass
class CyclingItem:
    """Setting restricted to a fixed ordered list of values."""

    id: str
    label: str
    current_value: str
    values: List[str]
    description: Optional[str] = None

    def __post_init__(self):
        if not self.values:
            raise ValueError(f"Item '{self.id}': cycling items need at least one value")
        if len(set(self.values)) != len(self.values):
            raise ValueError(f"Item '{self.id}': cycling values must be unique")

    def next_value(self) -> str:
        """The value after current_value, wrapping; values[0] if unknown."""
        try:
            index = self.values.index(self.current_value)
        except ValueError:
            index = -1
        return self.values[(index + 1) % len(self.values)]


@dataclass
class FreeTextItem:
    """Setting edited with the inline text editor."""

    id: str
    label: str
    current_value: str
    description: Optional[str] = None


@dataclass
class SubmenuItem:
    """Setting edited in a child panel.

    submenu(current_value, done) builds the child; the child calls done
    with the new value, or None when cancelled.
    """

    id: str
    label: str
    current_value: str
    submenu: SubmenuFactory = field(repr=False)
    description: Optional[str] = None


@dataclass
class HeaderItem:
    """Non-editable group heading (e.g. the owning extension's name)."""

    id: str
    label: str
    description: Optional[str] = None
    current_value: str = ""


SettingItem = Union[CyclingItem, FreeTextItem, SubmenuItem, HeaderItem]


def header_id(name: str) -> str:
    """Reserved id for a group heading."""
    return f"{HEADER_PREFIX}{name}"


def is_header(item: SettingItem) -> bool:
    """True for heading rows."""
    return isinstance(item, HeaderItem)


def make_setting_item(
    id: str,
    label: str,
    current_value: str = "",
    description: Optional[str] = None,
    values: Optional[Sequence[str]] = None,
    submenu: Optional[SubmenuFactory] = None,
) -> SettingItem:
    """Build the right row variant from optional fields.

    Ids with the reserved header prefix become headers. Otherwise a
    submenu wins over values, non-empty values give a cycling item, and
    anything else is free text.
    """
    if id.startswith(HEADER_PREFIX):
        return HeaderItem(id=id, label=label, description=description)
    if submenu is not None:
        return SubmenuItem(id, label, current_value, submenu, description)
    if values:
        return CyclingItem(id, label, current_value, list(values), description)
    return FreeTextItem(id, label, current_value, description)
