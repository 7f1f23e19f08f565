"""
Typed models of the YouTube Data API responses used by the pipeline.
Each response is validated once; a missing or mistyped field raises
DecodeFailure naming its path.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import DecodeFailure
from ..timestamps import parse_rfc3339
from .channel_info import ChannelInfo
from .video_info import PlaylistEntry, VideoRecord

ModelT = TypeVar("ModelT", bound="ApiModel")


class ApiModel(BaseModel):
    """Base for API payloads: camelCase on the wire, unknown fields ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PageInfo(ApiModel):
    total_results: int


class PagedResponse(ApiModel):
    page_info: PageInfo


# channels.list

class RelatedPlaylists(ApiModel):
    uploads: str


class ChannelContentDetails(ApiModel):
    related_playlists: RelatedPlaylists


class ChannelSnippet(ApiModel):
    title: str = "Unknown"
    custom_url: str = ""


class ChannelItem(ApiModel):
    id: str
    snippet: ChannelSnippet = Field(default_factory=ChannelSnippet)
    content_details: ChannelContentDetails


class ChannelListPayload(PagedResponse):
    items: List[ChannelItem] = Field(default_factory=list)


# playlistItems.list

class PlaylistItemContentDetails(ApiModel):
    video_id: str
    video_published_at: str


class PlaylistItem(ApiModel):
    content_details: PlaylistItemContentDetails


class PlaylistItemListPayload(PagedResponse):
    items: List[PlaylistItem] = Field(default_factory=list)
    next_page_token: Optional[str] = None


# videos.list

class VideoSnippet(ApiModel):
    title: str
    published_at: str


class VideoContentDetails(ApiModel):
    duration: str


class VideoItem(ApiModel):
    id: str
    snippet: VideoSnippet
    content_details: VideoContentDetails


class VideoListPayload(ApiModel):
    items: List[VideoItem] = Field(default_factory=list)


def _field_path(loc: Tuple[Any, ...]) -> str:
    """'items.0.contentDetails.videoId' becomes 'contentDetails.videoId'."""
    parts = [str(part) for part in loc if not isinstance(part, int)]
    if len(parts) > 1 and parts[0] == "items":
        parts = parts[1:]
    return ".".join(parts) or "<response>"


def decode(model: Type[ModelT], document: Any) -> ModelT:
    """Validate a raw response against its model."""
    try:
        return model.model_validate(document)
    except ValidationError as e:
        error = e.errors()[0]
        raise DecodeFailure(_field_path(error["loc"]), error["msg"])


@dataclass(frozen=True)
class ChannelListResponse:
    """channels.list looked up by handle."""
    total_results: int
    channel: Optional[ChannelInfo]

    @classmethod
    def from_response(cls, document: Dict[str, Any]) -> "ChannelListResponse":
        # Items are only required when exactly one channel matched
        total_results = decode(PagedResponse, document).page_info.total_results
        if total_results != 1:
            return cls(total_results=total_results, channel=None)

        payload = decode(ChannelListPayload, document)
        if not payload.items:
            raise DecodeFailure("items", "pageInfo reports one channel but no item was returned")
        item = payload.items[0]
        channel = ChannelInfo(
            channel_id=item.id,
            title=item.snippet.title,
            uploads_playlist_id=item.content_details.related_playlists.uploads,
            custom_url=item.snippet.custom_url,
        )
        return cls(total_results=total_results, channel=channel)


@dataclass(frozen=True)
class PlaylistItemsPage:
    """One page of playlistItems.list."""
    entries: List[PlaylistEntry]
    next_page_token: Optional[str]
    total_results: int

    @classmethod
    def from_response(cls, document: Dict[str, Any]) -> "PlaylistItemsPage":
        payload = decode(PlaylistItemListPayload, document)
        entries = [
            PlaylistEntry(
                published_at=parse_rfc3339(
                    item.content_details.video_published_at,
                    "contentDetails.videoPublishedAt",
                ),
                video_id=item.content_details.video_id,
            )
            for item in payload.items
        ]
        return cls(
            entries=entries,
            next_page_token=payload.next_page_token or None,
            total_results=payload.page_info.total_results,
        )


def video_record_from_response(document: Dict[str, Any], video_id: str) -> VideoRecord:
    """Decode a videos.list response for a single id into a VideoRecord."""
    payload = decode(VideoListPayload, document)
    if len(payload.items) != 1:
        raise DecodeFailure("items", f"expected exactly one video for id '{video_id}', got {len(payload.items)}")
    item = payload.items[0]
    return VideoRecord.build(
        published_at=parse_rfc3339(item.snippet.published_at, "snippet.publishedAt"),
        title=item.snippet.title,
        video_id=item.id,
        duration=item.content_details.duration,
    )
