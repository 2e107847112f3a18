"""Width-aware text helpers for strings that may contain ANSI styling.

Widths are measured in terminal cells with prompt_toolkit's wcwidth-based
``get_cwidth``; escape sequences take no space.
"""

from __future__ import annotations

import re
from typing import List

from prompt_toolkit.utils import get_cwidth

# CSI sequences (colors, cursor movement) and OSC sequences (hyperlinks)
ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

RESET = "\x1b[0m"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences."""
    return ANSI_PATTERN.sub("", text)


def visible_width(text: str) -> int:
    """Number of terminal cells the text occupies when printed."""
    return get_cwidth(strip_ansi(text))


def _tokens(text: str) -> List[str]:
    """Split text into escape sequences and single characters."""
    tokens: List[str] = []
    pos = 0
    for match in ANSI_PATTERN.finditer(text):
        tokens.extend(text[pos:match.start()])
        tokens.append(match.group())
        pos = match.end()
    tokens.extend(text[pos:])
    return tokens


def truncate_to_width(text: str, max_width: int, ellipsis: str = "…") -> str:
    """Truncate text to at most max_width visible cells.

    Escape sequences are kept; when anything was cut and the text carried
    styling, a reset is emitted before the ellipsis.

    Args:
        text: Text to truncate.
        max_width: Maximum visible width.
        ellipsis: Marker appended when text is cut ("" for none).
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    ellipsis_width = visible_width(ellipsis)
    if ellipsis_width > max_width:
        ellipsis, ellipsis_width = "", 0
    target = max_width - ellipsis_width

    result: List[str] = []
    width = 0
    styled = False
    for token in _tokens(text):
        if token.startswith("\x1b"):
            result.append(token)
            styled = True
            continue
        char_width = get_cwidth(token)
        if width + char_width > target:
            break
        result.append(token)
        width += char_width

    if styled:
        result.append(RESET)
    return "".join(result) + ellipsis


def _split_long_word(word: str, width: int) -> List[str]:
    """Hard-split a word wider than width into width-sized chunks."""
    chunks: List[str] = []
    current: List[str] = []
    current_width = 0
    for token in _tokens(word):
        token_width = 0 if token.startswith("\x1b") else get_cwidth(token)
        if current_width + token_width > width and current_width > 0:
            chunks.append("".join(current))
            current, current_width = [], 0
        current.append(token)
        current_width += token_width
    if current:
        chunks.append("".join(current))
    return chunks


def wrap_text_with_ansi(text: str, width: int) -> List[str]:
    """Word-wrap text to lines of at most width visible cells.

    Explicit newlines are kept as line breaks. Words wider than the line
    are split.

    Args:
        text: Text to wrap.
        width: Maximum visible width per line (values below 1 count as 1).

    Returns:
        Wrapped lines (at least one, possibly empty).
    """
    width = max(1, width)
    lines: List[str] = []

    for paragraph in text.split("\n"):
        current = ""
        current_width = 0
        for word in paragraph.split():
            word_width = visible_width(word)
            if word_width > width:
                if current:
                    lines.append(current)
                chunks = _split_long_word(word, width)
                lines.extend(chunks[:-1])
                current = chunks[-1]
                current_width = visible_width(current)
                continue
            if not current:
                current, current_width = word, word_width
            elif current_width + 1 + word_width <= width:
                current += " " + word
                current_width += 1 + word_width
            else:
                lines.append(current)
                current, current_width = word, word_width
        lines.append(current)

    return lines
