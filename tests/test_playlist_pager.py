"""Unit tests for uploads playlist pagination and date filtering."""

import math
from datetime import datetime, timezone

import pytest

from runtime_pipeline.core.errors import DecodeFailure, TimestampParseFailure
from runtime_pipeline.core.youtube.playlist_pager import (
    PageCursor,
    in_date_range,
    iter_playlist_pages,
    next_cursor,
)
from runtime_pipeline.core.youtube.responses import PlaylistItemsPage
from runtime_pipeline.core.youtube.video_info import PlaylistEntry

from conftest import paginate, playlist_item, playlist_page


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_items(count: int):
    return [
        playlist_item(f"vid{i:04d}", f"2024-{(i // 28) % 12 + 1:02d}-{i % 28 + 1:02d}T12:00:00Z")
        for i in range(count)
    ]


class ScriptedPages:
    """Serves pre-built pages keyed by continuation token."""

    def __init__(self, pages):
        self._first = pages[0]
        self._by_token = {page["nextPageToken"]: pages[i + 1] for i, page in enumerate(pages[:-1])}
        self.calls = []

    def __call__(self, page_token):
        self.calls.append(page_token)
        return self._first if page_token is None else self._by_token[page_token]


class TestNextCursor:
    """Tests for the pagination stop conditions."""

    def _page(self, entries: int, token, total: int) -> PlaylistItemsPage:
        return PlaylistItemsPage(
            entries=[PlaylistEntry(utc(2024, 1, 1), f"v{i}") for i in range(entries)],
            next_page_token=token,
            total_results=total,
        )

    def test_continues_with_token_and_items_left(self):
        cursor = next_cursor(PageCursor(), self._page(50, "next", 120))
        assert cursor == PageCursor(page_token="next", processed=50, total_results=120)

    def test_stops_on_empty_page(self):
        assert next_cursor(PageCursor(), self._page(0, "next", 120)) is None

    def test_stops_without_token(self):
        assert next_cursor(PageCursor(), self._page(50, None, 120)) is None

    def test_stops_when_total_reached(self):
        cursor = PageCursor(page_token="a", processed=100, total_results=120)
        assert next_cursor(cursor, self._page(20, "still-a-token", 120)) is None

    def test_stops_when_total_exceeded(self):
        """Inconsistent totals are not an error."""
        assert next_cursor(PageCursor(), self._page(50, "next", 10)) is None


class TestDateRange:
    """Tests for the inclusive publish-date filter."""

    entry = PlaylistEntry(utc(2024, 6, 1, 12, 0, 0), "v")

    def test_unbounded(self):
        assert in_date_range(self.entry)

    def test_bounds_are_inclusive(self):
        moment = self.entry.published_at
        assert in_date_range(self.entry, start_date=moment, end_date=moment)

    def test_before_start(self):
        assert not in_date_range(self.entry, start_date=utc(2024, 6, 1, 12, 0, 1))

    def test_after_end(self):
        assert not in_date_range(self.entry, end_date=utc(2024, 6, 1, 11, 59, 59))


class TestIterPlaylistPages:
    """Tests for the page generator against synthetic playlists."""

    @pytest.mark.parametrize("total,page_size", [
        (1, 50), (49, 50), (50, 50), (51, 50), (120, 50), (150, 50), (7, 3), (9, 3),
    ])
    def test_collects_everything_in_ceil_pages(self, total, page_size):
        fetch = ScriptedPages(paginate(make_items(total), page_size))
        batches = list(iter_playlist_pages(fetch))

        assert len(fetch.calls) == math.ceil(total / page_size)
        assert fetch.calls[0] is None
        ids = [entry.video_id for batch in batches for entry in batch]
        assert ids == [f"vid{i:04d}" for i in range(total)]

    def test_stops_on_reported_total_even_with_token(self):
        items = make_items(4)
        pages = [
            playlist_page(items[:2], total_results=4, next_page_token="p2"),
            playlist_page(items[2:], total_results=4, next_page_token="p3"),
            playlist_page([], total_results=4),
        ]
        fetch = ScriptedPages(pages)
        batches = list(iter_playlist_pages(fetch))
        assert fetch.calls == [None, "p2"]
        assert sum(len(b) for b in batches) == 4

    def test_empty_playlist(self):
        fetch = ScriptedPages([playlist_page([], total_results=0)])
        assert list(iter_playlist_pages(fetch)) == [[]]
        assert fetch.calls == [None]

    def test_filtered_items_still_count_toward_total(self):
        items = [
            playlist_item("new1", "2024-03-10T00:00:00Z"),
            playlist_item("new2", "2024-03-01T00:00:00Z"),
            playlist_item("mid1", "2024-02-15T00:00:00Z"),
            playlist_item("mid2", "2024-02-01T00:00:00Z"),
            playlist_item("old1", "2024-01-10T00:00:00Z"),
            playlist_item("old2", "2024-01-01T00:00:00Z"),
        ]
        pages = paginate(items, 2)
        # A stray token on the last page: only the total can stop the run
        pages[-1]["nextPageToken"] = "beyond"
        fetch = ScriptedPages(pages)

        batches = list(iter_playlist_pages(
            fetch,
            start_date=utc(2024, 2, 1),
            end_date=utc(2024, 2, 15),
        ))

        assert fetch.calls == [None, "token-2", "token-4"]
        assert [e.video_id for batch in batches for e in batch] == ["mid1", "mid2"]

    def test_unparseable_timestamp_is_fatal(self):
        fetch = ScriptedPages([playlist_page([playlist_item("v", "yesterday")], total_results=1)])
        with pytest.raises(TimestampParseFailure) as exc_info:
            list(iter_playlist_pages(fetch))
        assert exc_info.value.field == "contentDetails.videoPublishedAt"

    def test_missing_video_id_is_decode_failure(self):
        broken = {"contentDetails": {"videoPublishedAt": "2024-01-01T00:00:00Z"}}
        fetch = ScriptedPages([playlist_page([broken], total_results=1)])
        with pytest.raises(DecodeFailure) as exc_info:
            list(iter_playlist_pages(fetch))
        assert exc_info.value.field == "contentDetails.videoId"

    def test_missing_page_info_is_decode_failure(self):
        fetch = ScriptedPages([{"items": []}])
        with pytest.raises(DecodeFailure) as exc_info:
            list(iter_playlist_pages(fetch))
        assert exc_info.value.field == "pageInfo"
