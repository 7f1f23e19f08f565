"""Shared pytest fixtures for channel runtime tests."""

import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest

from runtime_pipeline.core.config import AppConfig


def channel_response(total_results: int = 1, uploads: str = "UUabcdefghijklmnopqrstuv") -> Dict[str, Any]:
    """channels.list response body."""
    items = [
        {
            "id": "UC" + uploads[2:],
            "snippet": {"title": "Test Channel", "customUrl": "@testchannel"},
            "contentDetails": {"relatedPlaylists": {"uploads": uploads}},
        }
        for _ in range(min(total_results, 1))
    ]
    return {"pageInfo": {"totalResults": total_results, "resultsPerPage": 5}, "items": items}


def playlist_item(video_id: str, published_at: str) -> Dict[str, Any]:
    return {"contentDetails": {"videoId": video_id, "videoPublishedAt": published_at}}


def playlist_page(
    items: List[Dict[str, Any]],
    total_results: int,
    next_page_token: Optional[str] = None
) -> Dict[str, Any]:
    page = {"pageInfo": {"totalResults": total_results, "resultsPerPage": 50}, "items": items}
    if next_page_token is not None:
        page["nextPageToken"] = next_page_token
    return page


def video_response(video_id: str, duration: str, title: str = "A video",
                   published_at: str = "2024-01-01T00:00:00Z") -> Dict[str, Any]:
    return {
        "pageInfo": {"totalResults": 1, "resultsPerPage": 1},
        "items": [
            {
                "id": video_id,
                "snippet": {"title": title, "publishedAt": published_at},
                "contentDetails": {"duration": duration},
            }
        ],
    }


def paginate(items: List[Dict[str, Any]], page_size: int) -> List[Dict[str, Any]]:
    """Split items into playlist pages; every page but the last carries a token."""
    pages = []
    for start in range(0, len(items), page_size):
        chunk = items[start:start + page_size]
        is_last = start + page_size >= len(items)
        pages.append(playlist_page(
            chunk,
            total_results=len(items),
            next_page_token=None if is_last else f"token-{start + page_size}"
        ))
    return pages


class FakeYouTubeClient:
    """Scripted stand-in for YouTubeClient that records every call."""

    def __init__(self, channel: Dict[str, Any], pages: List[Dict[str, Any]],
                 videos: Optional[Dict[str, Dict[str, Any]]] = None):
        self._channel = channel
        self._pages = {}
        self._first_page = pages[0] if pages else playlist_page([], 0)
        for index, page in enumerate(pages[:-1]):
            self._pages[page["nextPageToken"]] = pages[index + 1]
        self._videos = videos or {}
        self.channel_calls: List[str] = []
        self.page_calls: List[tuple] = []
        self.video_calls: List[str] = []
        self.snapshots: List[Dict[str, Any]] = []

    def fetch_channel(self, handle: str) -> Dict[str, Any]:
        self.channel_calls.append(handle)
        return self._channel

    def fetch_playlist_items(self, playlist_id: str, page_token: Optional[str] = None) -> Dict[str, Any]:
        self.page_calls.append((playlist_id, page_token))
        if page_token is None:
            return self._first_page
        return self._pages[page_token]

    def fetch_video(self, video_id: str) -> Dict[str, Any]:
        self.video_calls.append(video_id)
        return self._videos[video_id]

    def snapshot(self, response: Dict[str, Any]) -> None:
        self.snapshots.append(response)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config() -> AppConfig:
    """Configuration without date bounds, output or progress bar."""
    return AppConfig(
        api_key="test_api_key",
        channel="testchannel",
        output_path=None,
        show_progress=False,
    )
