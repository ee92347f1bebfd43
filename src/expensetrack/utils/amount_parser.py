"""Amount parsing utilities."""

import math
import re
from typing import Optional

# Leading numeric prefix, e.g. "12.50", "-3", ".5", "1e3", "42abc" -> 42
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INFINITY_PREFIX = re.compile(r"([+-]?)Infinity")


def parse_amount(amount_str: Optional[str]) -> float:
    """Parse an amount cell into a float.

    Reads the longest leading numeric prefix after surrounding whitespace,
    so "19.99 USD" parses as 19.99. Anything without a numeric prefix,
    including an empty or missing cell, yields NaN rather than raising.

    Handles:
    - "123.45"
    - "-123.45"
    - "+5"
    - ".5"
    - "1e3"
    - "Infinity" / "-Infinity"

    Args:
        amount_str: Raw amount cell, or None for a missing cell

    Returns:
        Float amount, NaN when the cell is not numeric
    """
    if amount_str is None:
        return math.nan

    amount_str = amount_str.strip()

    match = _NUMERIC_PREFIX.match(amount_str)
    if match:
        return float(match.group(0))

    match = _INFINITY_PREFIX.match(amount_str)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf

    return math.nan


def is_number(value: object) -> bool:
    """Return True for int/float values that are not bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
