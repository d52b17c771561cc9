"""Money value normalization.

Every amount in the game is shown with an ``M`` or ``K`` suffix and, in
some locales, a decimal comma ("1,5M"). All amounts are normalized to
millions.
"""

import re

# Leading numeric prefix, read the same way a lenient float parser would
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class ValueParseError(ValueError):
    """Raised when a non-empty amount has no readable number in it."""


def parse_value(value_str) -> float:
    """Parse an amount string into millions.

    Examples:
        "1,5M" -> 1.5
        "500K" -> 0.5
        "12"   -> 12.0
        ""     -> 0.0
        None   -> 0.0

    Raises:
        ValueParseError: if *value_str* is non-empty but not a number.
    """
    if not value_str:
        return 0.0
    if isinstance(value_str, (int, float)):
        return float(value_str)

    cleaned = str(value_str).strip().replace(",", ".", 1)
    m = _NUMBER_PREFIX.match(cleaned)
    if not m:
        raise ValueParseError(f"Cannot parse amount: {value_str!r}")

    value = float(m.group(0))
    suffix = cleaned.lower()
    if "m" in suffix:
        return value
    if "k" in suffix:
        return value / 1000
    return value

