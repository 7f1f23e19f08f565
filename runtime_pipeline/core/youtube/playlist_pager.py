"""
Uploads playlist pagination with publish-date filtering.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from .responses import PlaylistItemsPage
from .video_info import PlaylistEntry

logger = logging.getLogger(__name__)

PageFetcher = Callable[[Optional[str]], Dict[str, Any]]


@dataclass(frozen=True)
class PageCursor:
    """Pagination state between two playlistItems requests."""
    page_token: Optional[str] = None
    processed: int = 0
    total_results: Optional[int] = None


def next_cursor(cursor: PageCursor, page: PlaylistItemsPage) -> Optional[PageCursor]:
    """
    Advance the cursor past a page, or return None when pagination is over.

    Stops on an empty page, a missing continuation token, or once the items
    processed (filtered ones included) reach the reported total. Any of these
    may fire early on inconsistent API data; none of them is an error.
    """
    processed = cursor.processed + len(page.entries)
    if not page.entries:
        return None
    if page.next_page_token is None:
        return None
    if processed >= page.total_results:
        return None
    return PageCursor(
        page_token=page.next_page_token,
        processed=processed,
        total_results=page.total_results,
    )


def in_date_range(
    entry: PlaylistEntry,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None
) -> bool:
    """Inclusive on both bounds; a missing bound is unbounded."""
    if start_date is not None and entry.published_at < start_date:
        return False
    if end_date is not None and entry.published_at > end_date:
        return False
    return True


def iter_playlist_pages(
    fetch_page: PageFetcher,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None
) -> Iterator[List[PlaylistEntry]]:
    """
    Yield the entries of each page that fall inside [start_date, end_date].

    fetch_page receives the continuation token (None for the first page)
    and returns the raw playlistItems.list response.
    """
    cursor: Optional[PageCursor] = PageCursor()
    page_number = 0
    while cursor is not None:
        page_number += 1
        page = PlaylistItemsPage.from_response(fetch_page(cursor.page_token))
        kept = [entry for entry in page.entries if in_date_range(entry, start_date, end_date)]
        logger.debug(
            f"Page {page_number}: {len(page.entries)} items, {len(kept)} in range "
            f"(total reported: {page.total_results})"
        )
        yield kept
        cursor = next_cursor(cursor, page)
