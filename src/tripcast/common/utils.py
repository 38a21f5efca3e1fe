"""
Common utilities shared across all modules.
"""
import math
from datetime import datetime


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Rounds halves away from zero for positive values (2.5 -> 3, 0.125 -> 0.13).

    Python's built-in round() uses banker's rounding, which would make
    displayed durations flip between neighbours on exact halves.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def day_of_week(moment: datetime) -> int:
    """
    Day index with 0 = Sunday ... 6 = Saturday.
    """
    return (moment.weekday() + 1) % 7


def is_weekend(day: int) -> bool:
    return day in (0, 6)
