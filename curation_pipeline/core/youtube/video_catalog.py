"""
Video Catalog Fetcher
Retrieves the uploads a channel published within one calendar month.
"""

import calendar
import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional, Tuple

from ..errors import CatalogFetchError
from .channel_info import ChannelInfo
from .video_info import Video
from .youtube_client import YouTubeAPIError, YouTubeClient

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

CHANNEL_DETAILS_MESSAGE = "Could not load your channel details from YouTube."


def month_window(year: int, month_index: int, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """
    Inclusive [first instant, last millisecond] of a calendar month in the
    viewer's timezone, returned as UTC datetimes. tz=None means the local zone.
    """
    if not 0 <= month_index <= 11:
        raise ValueError(f"month_index must be between 0 and 11, got {month_index}")

    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, 0, 0, 0)
    end = datetime(year, month, last_day, 23, 59, 59, 999000)

    if tz is None:
        start, end = start.astimezone(), end.astimezone()
    else:
        start, end = start.replace(tzinfo=tz), end.replace(tzinfo=tz)

    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def to_rfc3339(moment: datetime) -> str:
    """UTC timestamp with millisecond precision and a 'Z' suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_published_at(value: str) -> datetime:
    moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class VideoCatalogFetcher:
    """
    Fetches one month of uploads for a channel.

    Responsibilities:
    - Compute the month window in the viewer's timezone.
    - Issue a single search request (no pagination, results beyond
      max_results are not returned).
    - Convert raw search items into fresh, unselected Video objects.
    """

    def __init__(self, youtube_client: YouTubeClient, max_results: int = 25, tz: Optional[tzinfo] = None):
        self._client = youtube_client
        self._max_results = max_results
        self._tz = tz

    def fetch_month(self, channel_id: str, month_index: int, year: int) -> List[Video]:
        start, end = month_window(year, month_index, self._tz)
        logger.info(
            f"Fetching uploads for {channel_id}: {MONTH_NAMES[month_index]} {year} "
            f"({to_rfc3339(start)} .. {to_rfc3339(end)})"
        )

        try:
            response = self._client.search_videos(
                channel_id=channel_id,
                published_after=to_rfc3339(start),
                published_before=to_rfc3339(end),
                max_results=self._max_results
            )
        except YouTubeAPIError as e:
            raise CatalogFetchError(f"Failed to fetch videos for {channel_id}: {e}") from e

        videos = []
        for item in response.get("items", []):
            video = self._to_video(item)
            if video is None:
                continue
            if not start <= video.published_at <= end:
                logger.debug(f"Dropping {video.id}: published {video.published_at} outside window")
                continue
            videos.append(video)

        logger.info(f"Fetched {len(videos)} videos for {MONTH_NAMES[month_index]} {year}")
        return videos

    def fetch_channel_info(self, channel_id: str) -> ChannelInfo:
        try:
            channel = self._client.get_channel(channel_id)
        except YouTubeAPIError as e:
            raise CatalogFetchError(
                f"Failed to fetch channel details for {channel_id}: {e}",
                user_message=CHANNEL_DETAILS_MESSAGE
            ) from e

        if channel is None or not channel.title:
            raise CatalogFetchError(f"Channel not found: {channel_id}", user_message=CHANNEL_DETAILS_MESSAGE)
        return channel

    def _to_video(self, item: Dict[str, Any]) -> Optional[Video]:
        video_id = (item.get("id") or {}).get("videoId")
        snippet = item.get("snippet") or {}
        if not video_id or not snippet.get("publishedAt"):
            logger.warning(f"Skipping malformed search item: {item!r}")
            return None

        try:
            published_at = parse_published_at(snippet["publishedAt"])
        except (TypeError, ValueError):
            logger.warning(f"Skipping {video_id}: unparseable publishedAt {snippet['publishedAt']!r}")
            return None

        thumbnails = snippet.get("thumbnails") or {}
        thumbnail = (thumbnails.get("medium") or thumbnails.get("default") or {}).get("url", "")

        return Video.from_id(
            video_id=video_id,
            title=snippet.get("title", ""),
            thumbnail=thumbnail,
            published_at=published_at
        )
