"""
YouTube API Client
Performs single request/response round trips against the YouTube Data API v3.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import DecodeFailure, TransportFailure

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


class YouTubeClient:
    """
    YouTube Data API client.

    Every call is blocking and made exactly once: no timeout handling,
    retries or backoff. Each raw response is forwarded to the diagnostic
    sink (when given) right after it is received, except the channel
    lookup, which the caller snapshots once it knows the run goes on.
    """

    def __init__(self, api_key: str, sink=None):
        """Initialize the YouTube API service."""
        self._sink = sink
        try:
            # static_discovery=False prevents the 'file_cache' warning in logs
            self._service = build('youtube', 'v3', developerKey=api_key, static_discovery=False)
        except HttpError as e:
            raise TransportFailure("discovery", status=e.resp.status, reason=str(e.reason))
        except (httplib2.HttpLib2Error, OSError) as e:
            raise TransportFailure("discovery", reason=str(e))

    def fetch_channel(self, handle: str) -> Dict[str, Any]:
        """channels.list by handle."""
        return self._execute(
            "channels.list",
            lambda: self._service.channels().list(
                part="snippet,contentDetails",
                forHandle=handle
            ),
            snapshot=False
        )

    def fetch_playlist_items(self, playlist_id: str, page_token: Optional[str] = None) -> Dict[str, Any]:
        """One page of playlistItems.list."""
        return self._execute(
            "playlistItems.list",
            lambda: self._service.playlistItems().list(
                part="contentDetails",
                playlistId=playlist_id,
                maxResults=PAGE_SIZE,
                pageToken=page_token
            )
        )

    def fetch_video(self, video_id: str) -> Dict[str, Any]:
        """videos.list for a single video."""
        return self._execute(
            "videos.list",
            lambda: self._service.videos().list(
                part="snippet,contentDetails",
                id=video_id
            )
        )

    def snapshot(self, response: Dict[str, Any]) -> None:
        """Write a raw response to the diagnostic sink."""
        if self._sink is not None:
            self._sink.overwrite(json.dumps(response, indent=2, ensure_ascii=False))

    def _execute(self, endpoint: str, make_request: Callable[[], Any], snapshot: bool = True) -> Dict[str, Any]:
        logger.debug(f"Requesting {endpoint}")
        try:
            response = make_request().execute()
        except HttpError as e:
            # The error body is the last response received
            if self._sink is not None and e.content:
                self._sink.overwrite(e.content.decode("utf-8", errors="replace"))
            raise TransportFailure(endpoint, status=e.resp.status, reason=str(e.reason))
        except json.JSONDecodeError as e:
            raise DecodeFailure("<response body>", f"{endpoint} returned invalid JSON: {e}")
        except (httplib2.HttpLib2Error, OSError) as e:
            raise TransportFailure(endpoint, reason=str(e))

        if snapshot:
            self.snapshot(response)
        return response
