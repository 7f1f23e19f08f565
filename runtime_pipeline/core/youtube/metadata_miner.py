"""
Channel Runtime Miner
Resolves a channel, lists its public uploads and aggregates their durations.
"""

import logging
from typing import List, Optional

from tqdm import tqdm

from ..analysis.runtime_report import RuntimeReport
from ..config.app_config import AppConfig
from ..errors import AmbiguousChannel, DecodeFailure
from .channel_info import ChannelInfo
from .playlist_pager import iter_playlist_pages
from .responses import ChannelListResponse, video_record_from_response
from .video_info import VideoRecord
from .youtube_client import YouTubeClient

logger = logging.getLogger(__name__)

PROGRESS_STEPS = 10


class ChannelRuntimeMiner:
    """
    Service responsible for the whole retrieval-and-aggregation run.

    Responsibilities:
    - Resolve the channel handle to its public uploads playlist.
    - Page through the playlist, keeping videos inside the date range.
    - Fetch every kept video's metadata, one request each, in listing order.
    - Reduce the videos to a RuntimeReport and persist the CSV export.

    Every step is sequential and any failure aborts the run.
    """

    def __init__(self, youtube_client: YouTubeClient, config: AppConfig, output=None):
        self._client = youtube_client
        self._config = config
        self._output = output

    def run(self) -> Optional[RuntimeReport]:
        """
        Execute the pipeline: Resolve -> List -> Fetch -> Reduce -> Save.

        Returns:
            RuntimeReport, or None when the handle does not resolve to exactly one channel.
        """
        try:
            channel = self.resolve_channel()
        except AmbiguousChannel as e:
            logger.warning(f"{e}. Nothing to do.")
            return None

        logger.info(f"Channel resolved: {channel.title} ({channel.channel_id})")
        playlist_id = channel.public_uploads_playlist_id
        logger.info(f"Listing public uploads playlist: {playlist_id}")

        video_ids = self.discover_video_ids(playlist_id)
        logger.info(f"Discovered {len(video_ids)} videos in range")

        videos = self.fetch_videos(video_ids)
        report = RuntimeReport(videos)

        if self._output is not None:
            self._output.overwrite(report.to_csv())
            logger.info(f"Saved {report.video_count} videos to {self._output.path}")

        return report

    def resolve_channel(self) -> ChannelInfo:
        """Look up the handle; raises AmbiguousChannel unless exactly one channel matches."""
        handle = self._config.channel
        logger.info(f"Resolving channel handle: @{handle}")
        raw = self._client.fetch_channel(handle)
        try:
            response = ChannelListResponse.from_response(raw)
        except DecodeFailure:
            self._client.snapshot(raw)
            raise
        # An unresolved handle leaves the output file untouched
        if response.channel is None:
            raise AmbiguousChannel(handle, response.total_results)
        self._client.snapshot(raw)
        return response.channel

    def discover_video_ids(self, playlist_id: str) -> List[str]:
        """Iterates through playlist items to collect the ids inside the date range."""
        video_ids: List[str] = []
        pages = iter_playlist_pages(
            lambda page_token: self._client.fetch_playlist_items(playlist_id, page_token),
            start_date=self._config.start_date,
            end_date=self._config.end_date
        )
        for entries in pages:
            video_ids.extend(entry.video_id for entry in entries)
        return video_ids

    def fetch_videos(self, video_ids: List[str]) -> List[VideoRecord]:
        """Fetch and decode every video, reporting progress in tenths."""
        videos: List[VideoRecord] = []
        total = len(video_ids)
        if total == 0:
            logger.warning("No videos found in the requested range.")
            return videos

        with tqdm(
            total=total,
            desc="Fetching video details",
            unit="video",
            disable=not self._config.show_progress,
            miniters=max(1, total // PROGRESS_STEPS),
            mininterval=0
        ) as progress:
            for video_id in video_ids:
                response = self._client.fetch_video(video_id)
                videos.append(video_record_from_response(response, video_id))
                progress.update(1)

        return videos
