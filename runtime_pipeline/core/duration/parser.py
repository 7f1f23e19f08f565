"""
ISO-8601 broadcast duration parsing.
Supports the day/hour/minute/second subset returned by the YouTube Data API.
"""

import re
from typing import Optional

from ..errors import DurationParseFailure

# A "T" must introduce at least one time component.
_DURATION_RE = re.compile(
    r"P(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?",
    re.ASCII
)

UNIT_SECONDS = {
    "days": 86400,
    "hours": 3600,
    "minutes": 60,
    "seconds": 1,
}


def parse_duration(text: str) -> Optional[int]:
    """
    Parse a duration such as 'PT45S' or 'P0DT1H2M3S' into seconds.

    Returns None for malformed input or when no component is present.
    Weeks and fractional seconds are not supported.
    """
    if not isinstance(text, str):
        return None

    match = _DURATION_RE.fullmatch(text)
    if not match:
        return None

    components = {unit: value for unit, value in match.groupdict().items() if value is not None}
    if not components:
        return None

    return sum(int(value) * UNIT_SECONDS[unit] for unit, value in components.items())


def parse_duration_or_raise(text: str, field: str = "contentDetails.duration") -> int:
    """Same as parse_duration, raising DurationParseFailure instead of returning None."""
    seconds = parse_duration(text)
    if seconds is None:
        raise DurationParseFailure(text, field)
    return seconds
