"""
Half-up rounding used for every reported hour, minute and percentage figure.

Python's round() is banker's rounding; attendance figures round .5 upward
(floor(x + 0.5)), so 0.125 hours becomes 0.13 and -2.5 minutes becomes -2.
"""
import math


def round2(value: float) -> float:
    """Round to two decimals, halves toward positive infinity"""
    return math.floor(value * 100 + 0.5) / 100


def round_int(value: float) -> int:
    """Round to an integer, halves toward positive infinity"""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """Whole-number percentage of part in whole; 0 when whole is 0"""
    if not whole:
        return 0
    return round_int(part / whole * 100)
