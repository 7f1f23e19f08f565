"""
YouTube API integration module
"""

from .channel_info import ChannelInfo
from .youtube_client import YouTubeClient

__all__ = ["ChannelInfo", "YouTubeClient"]
