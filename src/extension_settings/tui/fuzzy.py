"""Fuzzy filtering for search-as-you-type lists.

A label matches when every whitespace-separated query token appears in it
as a case-insensitive subsequence. Matches are ranked with rapidfuzz's
weighted ratio, with a bonus for contiguous and prefix matches.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, TypeVar

from rapidfuzz import fuzz, utils

from .text import strip_ansi

T = TypeVar("T")

_SUBSTRING_BONUS = 20.0
_PREFIX_BONUS = 10.0


def _is_subsequence(needle: str, haystack: str) -> bool:
    """True if all characters of needle appear in haystack, in order."""
    position = 0
    for char in needle:
        position = haystack.find(char, position)
        if position < 0:
            return False
        position += 1
    return True


def fuzzy_match(query: str, text: str) -> Optional[float]:
    """Score text against a query.

    Args:
        query: Search query; whitespace separates independent tokens.
        text: Candidate text (ANSI styling is ignored).

    Returns:
        Match score (higher is better), or None if the text does not match.
    """
    tokens = query.lower().split()
    plain = strip_ansi(text).strip().lower()
    if not tokens:
        return 0.0

    for token in tokens:
        if not _is_subsequence(token, plain):
            return None

    joined = " ".join(tokens)
    score = fuzz.WRatio(joined, plain, processor=utils.default_process)
    if joined in plain:
        score += _SUBSTRING_BONUS
    if plain.startswith(tokens[0]):
        score += _PREFIX_BONUS
    return score


def fuzzy_filter(items: Sequence[T], query: str, get_text: Callable[[T], str]) -> List[T]:
    """Filter and rank items by fuzzy match of their text.

    Args:
        items: Candidate items.
        query: Search query. An empty query keeps every item in order.
        get_text: Extracts the text to match from an item.

    Returns:
        Matching items, best first; ties keep their original order.
    """
    if not query.strip():
        return list(items)

    scored = []
    for index, item in enumerate(items):
        score = fuzzy_match(query, get_text(item))
        if score is not None:
            scored.append((-score, index, item))
    scored.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _, _, item in scored]
