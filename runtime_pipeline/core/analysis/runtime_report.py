"""
Runtime Report
Reduces the collected videos to a total runtime and renders it.
"""

import logging
from typing import List

import pandas as pd

from ..duration.formatter import TimeUnit, format_span
from ..youtube.video_info import VideoRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["#publishedAt", "title", "videoId", "duration", "duration_seconds"]

MIXED_UNIT_THRESHOLD = 60


class RuntimeReport:
    """
    Aggregated runtime of a set of videos.

    Responsibilities:
    - Hold the videos in fetch order as a DataFrame.
    - Sum their durations.
    - Render the total and the CSV export.
    """

    def __init__(self, videos: List[VideoRecord]):
        self._videos = list(videos)
        self._df = pd.DataFrame([v.to_row() for v in self._videos], columns=CSV_COLUMNS)

    @property
    def videos(self) -> List[VideoRecord]:
        return list(self._videos)

    @property
    def video_count(self) -> int:
        return len(self._videos)

    @property
    def total_seconds(self) -> int:
        """Sum of every video's duration; 0 for no videos."""
        return int(self._df["duration_seconds"].sum())

    def render_total(self, largest_unit: TimeUnit) -> str:
        """Mixed-unit rendering of the total, e.g. '1 day 2 hours 3 seconds'."""
        return format_span(self.total_seconds, largest_unit)

    def summary_lines(self, largest_unit: TimeUnit) -> List[str]:
        """Human-readable run summary; the mixed-unit line only from one minute up."""
        total = self.total_seconds
        lines = [
            f"Videos counted: {self.video_count}",
            f"Total runtime: {total} seconds",
        ]
        if total >= MIXED_UNIT_THRESHOLD:
            lines.append(f"Total runtime: {self.render_total(largest_unit)}")
        return lines

    def to_csv(self) -> str:
        """CSV export with one row per video in fetch order."""
        return self._df.to_csv(index=False, lineterminator="\n")
