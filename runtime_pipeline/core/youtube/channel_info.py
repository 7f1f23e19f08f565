"""
Channel Information Domain Model
Channel Resolution
"""

# The default uploads playlist ("UU...") mixes shorts, live streams and
# unlisted content. "UULF..." lists the public long-form uploads only.
UPLOADS_PREFIX = "UU"
PUBLIC_UPLOADS_PREFIX = "UULF"


def public_uploads_playlist(uploads_playlist_id: str) -> str:
    """Rewrite an uploads playlist id into its public-uploads-only view."""
    return PUBLIC_UPLOADS_PREFIX + uploads_playlist_id[len(UPLOADS_PREFIX):]


class ChannelInfo:
    """
    Domain model representing a resolved YouTube channel.
    Represents a VALID channel state only.
    """

    def __init__(
        self,
        channel_id: str,
        title: str,
        uploads_playlist_id: str,
        custom_url: str = "",
    ):
        self.channel_id = channel_id
        self.title = title
        self.uploads_playlist_id = uploads_playlist_id
        self.custom_url = custom_url

    @property
    def public_uploads_playlist_id(self) -> str:
        return public_uploads_playlist(self.uploads_playlist_id)

    def __repr__(self) -> str:
        return f"ChannelInfo(title={self.title!r}, handle={self.custom_url!r}, id={self.channel_id!r})"
