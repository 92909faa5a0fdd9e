"""Currency formatting and rounding helpers.

Revenue figures travel through the system as display strings (``"$1,234"``)
and are parsed back when summed, so formatting and parsing must stay exact
inverses on integers.
"""

from __future__ import annotations

import math
import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (``Math.round``)."""
    return math.floor(value + 0.5)


def round_to(value: float, places: int = 1) -> float:
    """Round to ``places`` decimals with :func:`round_half_up` semantics."""
    factor = 10 ** places
    return round_half_up(value * factor) / factor


def format_currency(value: float) -> str:
    """Format a dollar amount as ``"$1,234"`` (rounded, thousands separators)."""
    return f"${round_half_up(value):,}"


def parse_currency(text: str) -> int:
    """Parse a string produced by :func:`format_currency` back to an integer.

    Strips ``$`` and ``,`` and reads the leading integer. Returns 0 when no
    integer can be read.
    """
    match = _LEADING_INT.match(re.sub(r"[$,]", "", text or ""))
    return int(match.group(1)) if match else 0
