"""
Video Domain Models
Playlist entries and fully resolved videos.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..duration.parser import parse_duration_or_raise
from ..timestamps import format_rfc3339


@dataclass(frozen=True)
class PlaylistEntry:
    """One uploads playlist item: only what date filtering and lookup need."""
    published_at: datetime
    video_id: str


@dataclass(frozen=True)
class VideoRecord:
    """
    Domain model representing a single video with a parsed duration.
    Use VideoRecord.build so that an unparseable duration never yields a record.
    """
    published_at: datetime
    title: str
    video_id: str
    duration: str
    duration_seconds: int

    @classmethod
    def build(cls, published_at: datetime, title: str, video_id: str, duration: str) -> "VideoRecord":
        return cls(
            published_at=published_at,
            title=title,
            video_id=video_id,
            duration=duration,
            duration_seconds=parse_duration_or_raise(duration),
        )

    def to_row(self) -> Dict[str, Any]:
        """Convert object to a CSV row keyed by output column."""
        return {
            "#publishedAt": format_rfc3339(self.published_at),
            "title": self.title,
            "videoId": self.video_id,
            "duration": self.duration,
            "duration_seconds": self.duration_seconds,
        }
