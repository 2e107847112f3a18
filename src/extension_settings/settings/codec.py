"""String encoding for setting values.

Values are always strings at the widget and storage boundary. These helpers
convert richer Python values to and from that representation.
"""

from enum import Enum
from typing import Any, Iterable, List

_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}


def encode_value(value: Any) -> str:
    """Encode a Python value as a setting string.

    Args:
        value: Value to encode (str, bool, int, float, list/tuple, or None).

    Returns:
        The string form. Booleans become "true"/"false", sequences become
        comma-joined ids, and None becomes "".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return encode_value(value.value)
    if isinstance(value, str):
        return str(value)
    if isinstance(value, (list, tuple)):
        return join_ordered_value(encode_value(item) for item in value)
    return str(value)


def decode_bool(value: str) -> bool:
    """Decode a boolean setting string.

    Raises:
        ValueError: If the string is not a recognized boolean word.
    """
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def parse_ordered_value(value: Any) -> List[str]:
    """Parse a comma-separated ordered list of ids.

    Whitespace around ids is trimmed and empty entries are dropped, so
    malformed input like " a,,b , " parses as ["a", "b"].

    Args:
        value: The stored value (string, list, or None).

    Returns:
        List of ids in stored order.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def join_ordered_value(ids: Iterable[str]) -> str:
    """Join ids into the stored comma-separated form ("" for none)."""
    return ",".join(item.strip() for item in ids if item and item.strip())
