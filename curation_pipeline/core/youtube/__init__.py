"""
YouTube API integration module
"""

from .channel_info import ChannelInfo
from .channel_resolver import ChannelIdentifierResolver
from .video_catalog import MONTH_NAMES, VideoCatalogFetcher
from .video_info import Video, VideoFormat
from .youtube_client import YouTubeAPIError, YouTubeClient

__all__ = [
    "ChannelInfo",
    "ChannelIdentifierResolver",
    "MONTH_NAMES",
    "Video",
    "VideoCatalogFetcher",
    "VideoFormat",
    "YouTubeAPIError",
    "YouTubeClient",
]
