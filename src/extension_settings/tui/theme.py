"""Styling for the settings widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class CLIColors:
    """ANSI color codes for terminal output."""

    reset: str = "\033[0m"
    bold: str = "\033[1m"
    dim: str = "\033[2m"
    blue: str = "\033[34m"
    cyan: str = "\033[36m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    red: str = "\033[31m"
    gray: str = "\033[90m"


def _plain_label(text: str, selected: bool) -> str:
    return text


def _plain(text: str) -> str:
    return text


@dataclass
class SettingsListTheme:
    """Styling callbacks shared by the settings list and its submenus.

    Attributes:
        label: Styles a row label; selected is True for the cursor row.
        value: Styles a row value.
        description: Styles description lines of the selected row.
        cursor: Marker drawn before the cursor row.
        hint: Styles hints, empty-state messages and scroll indicators.
    """

    label: Callable[[str, bool], str] = field(default=_plain_label)
    value: Callable[[str, bool], str] = field(default=_plain_label)
    description: Callable[[str], str] = field(default=_plain)
    cursor: str = "→ "
    hint: Callable[[str], str] = field(default=_plain)


def default_theme(
    colors: Optional[CLIColors] = None,
    enabled: bool = True,
    cursor: str = "→ ",
) -> SettingsListTheme:
    """Build the standard colored theme.

    Args:
        colors: Palette override.
        enabled: If False, return an unstyled theme.
        cursor: Cursor row marker.
    """
    if not enabled:
        return SettingsListTheme(cursor=cursor)

    c = colors or CLIColors()

    def label(text: str, selected: bool) -> str:
        return f"{c.cyan}{text}{c.reset}" if selected else text

    def value(text: str, selected: bool) -> str:
        return f"{c.cyan}{text}{c.reset}" if selected else f"{c.gray}{text}{c.reset}"

    def description(text: str) -> str:
        return f"{c.gray}{text}{c.reset}"

    def hint(text: str) -> str:
        return f"{c.dim}{text}{c.reset}"

    return SettingsListTheme(
        label=label,
        value=value,
        description=description,
        cursor=f"{c.cyan}{cursor}{c.reset}",
        hint=hint,
    )


def bold(text: str, colors: Optional[CLIColors] = None) -> str:
    """Wrap text in bold."""
    c = colors or CLIColors()
    return f"{c.bold}{text}{c.reset}"
