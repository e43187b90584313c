"""Shared number formatting for tool output text."""
from decimal import Decimal
from typing import Any
import math


def format_number(value: Any) -> str:
    """Render a number the way JSON clients print it.

    Integral floats drop the ".0" (5.0 -> "5"), exponents have no padding
    (1e-07 -> "1e-7") and small magnitudes down to 1e-6 stay positional.
    Missing values render as "-".

    Examples:
        >>> format_number(5.0)
        '5'
        >>> format_number(2.5)
        '2.5'
        >>> format_number(0.00001)
        '0.00001'
    """
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if not isinstance(value, float):
        return str(value)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"
