"""
YouTube API Client
Thin wrapper over the YouTube Data API v3 used by the resolver and the catalog fetcher.
"""

import logging
from typing import Any, Dict, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import MissingCredentialError
from .channel_info import ChannelInfo

logger = logging.getLogger(__name__)


class YouTubeAPIError(Exception):
    """Raised when a YouTube API call fails (HTTP error or transport failure)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class YouTubeClient:
    """
    YouTube Data API client.

    The underlying discovery service is built lazily on first use, so a
    client without an API key can be constructed and only fails (with
    MissingCredentialError) when a call actually needs the API.
    """

    def __init__(self, api_key: str, service: Any = None):
        """
        Args:
            api_key: YouTube Data API key (empty string when not configured)
            service: Pre-built discovery service, mainly for tests
        """
        self._api_key = api_key or ""
        self._service = service

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    def _get_service(self):
        if not self._api_key:
            raise MissingCredentialError("YouTube API key is not configured")
        if self._service is None:
            try:
                # static_discovery=False prevents the 'file_cache' warning in logs
                self._service = build('youtube', 'v3', developerKey=self._api_key, static_discovery=False)
            except HttpError as e:
                status = getattr(e.resp, "status", None)
                logger.error(f"Could not load the YouTube API discovery document (status={status}): {e}")
                raise YouTubeAPIError(f"service discovery failed with HTTP {status}", status=status) from e
            except (httplib2.HttpLib2Error, OSError) as e:
                logger.error(f"Transport error while building the YouTube service: {e}")
                raise YouTubeAPIError(f"service discovery failed: {e}") from e
        return self._service

    def _execute(self, request, operation: str) -> Dict[str, Any]:
        try:
            response = request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            logger.error(f"YouTube API error during {operation} (status={status}): {e}")
            raise YouTubeAPIError(f"{operation} failed with HTTP {status}", status=status) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"Transport error during {operation}: {e}")
            raise YouTubeAPIError(f"{operation} failed: {e}") from e

        if not isinstance(response, dict):
            raise YouTubeAPIError(f"{operation} returned an unexpected payload")
        return response

    def search_channel_ids(self, query: str, max_results: int = 1) -> List[str]:
        """Searches channels by name and returns the matching channel IDs, best match first."""
        service = self._get_service()
        response = self._execute(
            service.search().list(
                part="snippet",
                type="channel",
                q=query,
                maxResults=max_results
            ),
            "channel search"
        )

        channel_ids = []
        for item in response.get("items", []):
            channel_id = (item.get("id") or {}).get("channelId") \
                or (item.get("snippet") or {}).get("channelId")
            if channel_id:
                channel_ids.append(channel_id)
        return channel_ids

    def get_channel(self, channel_id: str) -> Optional[ChannelInfo]:
        """Fetches channel details by ID. Returns None when the channel does not exist."""
        service = self._get_service()
        response = self._execute(
            service.channels().list(part="snippet", id=channel_id),
            "channel details"
        )

        items = response.get("items", [])
        if not items:
            return None

        snippet = items[0].get("snippet", {})
        thumbnails = snippet.get("thumbnails", {})
        return ChannelInfo(
            channel_id=items[0].get("id", channel_id),
            title=snippet.get("title", ""),
            custom_url=snippet.get("customUrl", ""),
            thumbnail=(thumbnails.get("default") or {}).get("url", "")
        )

    def search_videos(
        self,
        channel_id: str,
        published_after: str,
        published_before: str,
        max_results: int = 25
    ) -> Dict[str, Any]:
        """Low-level API call to search.list for a channel's uploads in a date range."""
        service = self._get_service()
        return self._execute(
            service.search().list(
                part="snippet",
                channelId=channel_id,
                maxResults=max_results,
                order="date",
                type="video",
                publishedAfter=published_after,
                publishedBefore=published_before
            ),
            "video search"
        )
