"""
Application Configuration Model
Represents a validated configuration state
"""

from datetime import datetime
from typing import Optional

from ..duration.formatter import TimeUnit


class AppConfig:
    """
    Immutable configuration object for a channel runtime run.

    Represents a VALID configuration state only.
    All validation must be performed before instantiation.
    """

    def __init__(
        self,
        api_key: str,
        channel: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        output_path: Optional[str] = "output.txt",
        largest_unit: TimeUnit = TimeUnit.DAY,
        show_progress: bool = True,
        log_file: Optional[str] = None
    ):
        """
        Initialize AppConfig with validated values.

        Args:
            api_key: YouTube API key (non-empty)
            channel: Channel handle without the '@' prefix (non-empty)
            start_date: Inclusive lower publish-date bound (UTC, optional)
            end_date: Inclusive upper publish-date bound (UTC, optional)
            output_path: Diagnostic snapshot / CSV file, None to disable
            largest_unit: Largest unit used when rendering the total
            show_progress: Whether to display the per-video progress bar
            log_file: Optional log file in addition to stderr
        """
        self._api_key = api_key
        self._channel = channel
        self._start_date = start_date
        self._end_date = end_date
        self._output_path = output_path
        self._largest_unit = largest_unit
        self._show_progress = show_progress
        self._log_file = log_file

    @property
    def api_key(self) -> str:
        """YouTube API key."""
        return self._api_key

    @property
    def channel(self) -> str:
        """Channel handle, without '@'."""
        return self._channel

    @property
    def start_date(self) -> Optional[datetime]:
        return self._start_date

    @property
    def end_date(self) -> Optional[datetime]:
        return self._end_date

    @property
    def output_path(self) -> Optional[str]:
        return self._output_path

    @property
    def largest_unit(self) -> TimeUnit:
        return self._largest_unit

    @property
    def show_progress(self) -> bool:
        return self._show_progress

    @property
    def log_file(self) -> Optional[str]:
        return self._log_file

    def __repr__(self) -> str:
        """String representation for debugging; never includes the key."""
        return (
            f"AppConfig(channel={self.channel!r}, "
            f"start_date={self.start_date}, "
            f"end_date={self.end_date}, "
            f"output_path={self.output_path!r}, "
            f"largest_unit={self.largest_unit.label!r})"
        )
