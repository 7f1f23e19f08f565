"""
Span formatting: decomposes a number of seconds into days, hours, minutes and seconds.
"""

from enum import Enum
from typing import List, Tuple


class TimeUnit(Enum):
    """Units available for decomposition, largest first."""
    DAY = ("day", 86400)
    HOUR = ("hour", 3600)
    MINUTE = ("minute", 60)
    SECOND = ("second", 1)

    def __init__(self, label: str, seconds: int):
        self.label = label
        self.seconds = seconds

    @classmethod
    def from_name(cls, name: str) -> "TimeUnit":
        """Look up a unit by its singular or plural label, e.g. 'day' or 'hours'."""
        key = name.strip().lower()
        for unit in cls:
            if key in (unit.label, unit.label + "s"):
                return unit
        raise ValueError(f"Unknown time unit: {name!r}")

    def pluralize(self, count: int) -> str:
        return self.label if count == 1 else self.label + "s"


_UNITS_DESCENDING = list(TimeUnit)


def decompose_span(seconds: int, largest_unit: TimeUnit) -> List[Tuple[int, TimeUnit]]:
    """
    Greedy decomposition of a non-negative span, from largest_unit down to seconds.

    Zero-valued components are omitted, except that seconds are always
    present when every larger component is zero.
    """
    if seconds < 0:
        raise ValueError(f"Cannot decompose a negative span: {seconds}")

    components: List[Tuple[int, TimeUnit]] = []
    remaining = seconds
    for unit in _UNITS_DESCENDING[_UNITS_DESCENDING.index(largest_unit):]:
        count, remaining = divmod(remaining, unit.seconds)
        if count or (unit is TimeUnit.SECOND and not components):
            components.append((count, unit))
    return components


def format_span(seconds: int, largest_unit: TimeUnit) -> str:
    """
    Render a span as e.g. '1 day 1 hour 1 minute 1 second'.

    Negative spans are rendered as the decomposition of their magnitude
    with a leading '-'.
    """
    sign = "-" if seconds < 0 else ""
    parts = [f"{count} {unit.pluralize(count)}" for count, unit in decompose_span(abs(seconds), largest_unit)]
    return sign + " ".join(parts)
