"""
RFC3339 timestamp helpers shared by configuration and API decoding.
"""

import re
from datetime import datetime, timedelta, timezone

from .errors import TimestampParseFailure

# date-time from RFC3339 section 5.6
_RFC3339_RE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|(?P<sign>[+-])(?P<offset_hour>\d{2}):(?P<offset_minute>\d{2}))",
    re.ASCII
)


def _offset(match: "re.Match[str]") -> timezone:
    if match.group("sign") is None:
        return timezone.utc
    hours = int(match.group("offset_hour"))
    minutes = int(match.group("offset_minute"))
    if hours > 23 or minutes > 59:
        raise ValueError("offset out of range")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if match.group("sign") == "-" else delta)


def parse_rfc3339(value: str, field: str) -> datetime:
    """Parse an RFC3339 timestamp into an aware UTC datetime."""
    match = _RFC3339_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise TimestampParseFailure(str(value), field)

    # Sub-microsecond digits are dropped
    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    try:
        parsed = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            int(fraction),
            tzinfo=_offset(match),
        )
    except ValueError:
        raise TimestampParseFailure(value, field)
    return parsed.astimezone(timezone.utc)


def format_rfc3339(moment: datetime) -> str:
    """UTC, second precision, 'Z' suffix."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
