"""
Channel Identifier Resolver
Turns a user-supplied channel reference (ID, channel link or @handle) into a canonical channel ID.
"""

import logging
import re

from ..errors import ChannelUnresolvableError, MissingCredentialError, UnresolvableReason
from .youtube_client import YouTubeAPIError, YouTubeClient

logger = logging.getLogger(__name__)

CHANNEL_ID_PREFIX = "UC"
CHANNEL_ID_LENGTH = 24

CHANNEL_URL_PATTERN = re.compile(r"channel/(UC[a-zA-Z0-9_-]{22})")
HANDLE_PATTERN = re.compile(r"@([a-zA-Z0-9_-]+)")


def is_canonical_id(value: str) -> bool:
    return value.startswith(CHANNEL_ID_PREFIX) and len(value) == CHANNEL_ID_LENGTH


class ChannelIdentifierResolver:
    """
    Resolution rules, first match wins:
    1. Literal channel ID ('UC' + 22 chars), returned as-is
    2. Channel link containing /channel/UC...
    3. Handle (@name) anywhere in the input, resolved with one channel search

    Only rule 3 touches the network, and it is never retried.
    """

    def __init__(self, youtube_client: YouTubeClient):
        self._client = youtube_client

    def resolve(self, channel_input: str) -> str:
        identifier = (channel_input or "").strip()

        if is_canonical_id(identifier):
            logger.info(f"Resolved by direct ID: {identifier}")
            return identifier

        match = CHANNEL_URL_PATTERN.search(identifier)
        if match:
            logger.info(f"Resolved from channel link: {match.group(1)}")
            return match.group(1)

        match = HANDLE_PATTERN.search(identifier)
        if match:
            return self._resolve_handle(match.group(1))

        raise ChannelUnresolvableError(
            UnresolvableReason.NO_PATTERN,
            f"No channel ID, channel link or handle in input: {identifier!r}"
        )

    def _resolve_handle(self, handle: str) -> str:
        try:
            channel_ids = self._client.search_channel_ids(handle, max_results=1)
        except MissingCredentialError as e:
            raise ChannelUnresolvableError(UnresolvableReason.MISSING_CREDENTIAL, str(e)) from e
        except YouTubeAPIError as e:
            raise ChannelUnresolvableError(
                UnresolvableReason.LOOKUP_FAILED, f"Lookup for @{handle} failed: {e}"
            ) from e

        if not channel_ids or not is_canonical_id(channel_ids[0]):
            logger.warning(f"Handle not found: @{handle}")
            raise ChannelUnresolvableError(UnresolvableReason.NOT_FOUND, f"Handle not found: @{handle}")

        logger.info(f"Resolved handle @{handle} to {channel_ids[0]}")
        return channel_ids[0]
