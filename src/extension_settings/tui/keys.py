"""Raw terminal input tokens to key ids.

Escape sequences are resolved with prompt_toolkit's VT100 tables, so every
sequence prompt_toolkit understands maps to the same key id here (e.g.
"\\x1b[A" -> "up", "\\x1b[1;2A" -> "s-up", "\\r" -> "enter").
"""

from __future__ import annotations

from typing import Optional

from prompt_toolkit.input.ansi_escape_sequences import ANSI_SEQUENCES
from prompt_toolkit.keys import Keys

# prompt_toolkit names for keys that have a friendlier common name
_KEY_ALIASES = {
    Keys.ControlM.value: "enter",
    Keys.ControlJ.value: "enter",
    Keys.ControlH.value: "backspace",
    Keys.ControlI.value: "tab",
}

# Modifier spellings accepted in configured key ids ("shift+up", "ctrl+c")
_MODIFIER_PREFIXES = {
    "shift+": "s-",
    "ctrl+": "c-",
    "control+": "c-",
}


def normalize_key_id(key_id: str) -> str:
    """Normalize a configured key id to the form returned by parse_key.

    Examples:
        "Shift+Up" -> "s-up", "ctrl+c" -> "c-c", "Return" -> "enter".
    """
    name = key_id.strip().lower()
    if name in ("return", "c-m", "c-j"):
        return "enter"
    if name == "esc":
        return "escape"
    if name == "c-h":
        return "backspace"
    if name == "c-i":
        return "tab"
    for prefix, replacement in _MODIFIER_PREFIXES.items():
        if name.startswith(prefix):
            return replacement + name[len(prefix):]
    return name


def parse_key(data: str) -> Optional[str]:
    """Resolve a raw input token to a key id.

    Args:
        data: Raw bytes of one key press, as text.

    Returns:
        Key id such as "up", "s-down", "enter", "escape", "space", "c-c",
        or None for printable text and unknown sequences.
    """
    if data == " ":
        return "space"

    key = ANSI_SEQUENCES.get(data)
    # Tuples encode meta-modified keys (escape + key); not distinguished here
    if not isinstance(key, Keys):
        return None
    return _KEY_ALIASES.get(key.value, key.value)


def matches_key(data: str, key_id: str) -> bool:
    """Check whether a raw token is the given key.

    Args:
        data: Raw input token.
        key_id: Key id, in parse_key form or a friendly spelling.
    """
    parsed = parse_key(data)
    return parsed is not None and parsed == normalize_key_id(key_id)


def is_printable(data: str) -> bool:
    """True if the token is plain text (no control characters)."""
    return bool(data) and all(ch >= " " and ch != "\x7f" for ch in data)
