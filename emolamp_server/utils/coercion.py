"""Permissive value coercion for client-supplied JSON.

Request bodies are never rejected for a bad field; the field falls back to
its default instead.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_int(value: Any, default: Optional[int]) -> Optional[int]:
    """Return *value* as an int, or *default* when it cannot be read as a number.

    Numeric strings are accepted and fractional values are truncated.
    """

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return default
        try:
            return int(stripped)
        except ValueError:
            pass
        try:
            parsed = float(stripped)
        except ValueError:
            return default
        return int(parsed) if math.isfinite(parsed) else default
    return default


def leading_int(value: Any, default: Optional[int]) -> Optional[int]:
    """Like :func:`coerce_int`, but a string only needs to start with digits.

    ``"1700000000000abc"`` reads as ``1700000000000``.
    """

    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else default
    return coerce_int(value, default)


def coerce_str(value: Any, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return default


def as_mapping(value: Any) -> Dict[str, Any]:
    """Return *value* as a plain dict; anything that is not a mapping becomes ``{}``."""
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items()}
    return {}


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


__all__ = ["as_mapping", "clamp", "coerce_int", "coerce_str", "leading_int"]
