"""
Error kinds raised by the runtime pipeline.
Every fatal condition propagates unchanged to main, which reports it and exits.
"""

from typing import Optional


class VideoSumError(Exception):
    """Base class for all pipeline failures."""
    pass


class TransportFailure(VideoSumError):
    """A request did not complete or returned a non-success HTTP status."""

    def __init__(self, endpoint: str, status: Optional[int] = None, reason: str = ""):
        self.endpoint = endpoint
        self.status = status
        self.reason = reason
        status_text = f"HTTP {status}" if status is not None else "no response"
        message = f"Request to '{endpoint}' failed ({status_text})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DecodeFailure(VideoSumError):
    """An expected field is missing or malformed in an API response."""

    def __init__(self, field: str, detail: str = ""):
        self.field = field
        self.detail = detail
        message = f"Could not decode field '{field}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class AmbiguousChannel(VideoSumError):
    """
    The channel lookup did not return exactly one result.
    Not fatal: the pipeline turns it into a warning and a successful no-op.
    """

    def __init__(self, handle: str, count: int):
        self.handle = handle
        self.count = count
        super().__init__(f"Channel lookup for '{handle}' returned {count} results, expected exactly 1")


class DurationParseFailure(VideoSumError):
    """A video's duration string could not be parsed."""

    def __init__(self, value: str, field: str = "contentDetails.duration"):
        self.value = value
        self.field = field
        super().__init__(f"Could not parse duration field '{field}': {value!r}")


class TimestampParseFailure(VideoSumError):
    """A publish timestamp is not valid RFC3339."""

    def __init__(self, value: str, field: str):
        self.value = value
        self.field = field
        super().__init__(f"Could not parse timestamp field '{field}': {value!r}")
