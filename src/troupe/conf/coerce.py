"""Defensive coercion of configuration values.

Configuration arrives from settings modules, JSON files or plugin-parameter style
strings, so numbers may be ints, floats, numeric strings or junk. Everything
collapses to a safe default instead of raising; the systems treat 0 as "disabled".
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def to_int(value: Any, default: int = 0) -> int:  # noqa: ANN401
    """Convert value to int, returning default when it is not numeric.

    Example:
        >>> to_int("12")
        12
        >>> to_int("abc")
        0
        >>> to_int(None, default=-1)
        -1
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default


def to_list(value: Any) -> list[Any]:  # noqa: ANN401
    """Normalize a list setting that may also be given as a JSON string.

    Strings that do not decode to a JSON array, and any other non-list value,
    yield an empty list.
    """
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed JSON list setting: %r", value)
            return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return []
