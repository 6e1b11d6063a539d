"""Lenient numeric parsing and derived cricket rates.

Upstream feeds mix numbers and numeric strings ("150", "19.4", "45*").
Anything that cannot be read as a finite number becomes None. Zero is a real
cricket statistic, so "absent" must never collapse to 0.
"""

import math
import re
from typing import Any

# Trailing markers seen in scorecards: "45*" (not out), "12.3 ov"
_NUMERIC_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(?:\*|ov|overs)?\s*$", re.IGNORECASE)


def parse_float(value: Any) -> float | None:
    """Parse a number leniently.

    Returns:
        Finite float, or None for missing, boolean, NaN/inf or non-numeric input
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_RE.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_int(value: Any) -> int | None:
    """Parse an integer count (runs, wickets, balls). Fractions are rejected."""
    number = parse_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def rate(numerator: float | None, denominator: float | None, scale: float = 1.0) -> float | None:
    """numerator * scale / denominator rounded to 2 places, or None.

    None unless both values are known and the denominator is positive.
    """
    if numerator is None or denominator is None or denominator <= 0:
        return None
    return round(numerator * scale / denominator, 2)


def run_rate(runs: int | None, overs: float | None) -> float | None:
    return rate(runs, overs)


def economy(runs_conceded: int | None, overs: float | None) -> float | None:
    return rate(runs_conceded, overs)


def strike_rate(runs: int | None, balls: int | None) -> float | None:
    return rate(runs, balls, scale=100.0)
