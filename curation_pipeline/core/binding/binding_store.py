"""
Channel Binding Store
Durable single-channel binding per user, with a hard cap on changes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import ChangeLimitExceededError
from ..storage.binding_storage import BindingStorage
from ..youtube.channel_resolver import is_canonical_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHANGES = 2


@dataclass(frozen=True)
class ChannelBinding:
    channel_id: Optional[str]
    change_count: int = 0
    max_changes: int = DEFAULT_MAX_CHANGES

    @property
    def is_bound(self) -> bool:
        return self.channel_id is not None

    @property
    def changes_left(self) -> int:
        return self.max_changes - self.change_count

    def to_record(self) -> Dict[str, Any]:
        return {"channel_id": self.channel_id, "change_count": self.change_count}


class ChannelBindingStore:
    """
    Owns the ChannelBinding of one user.

    The record is read once at construction and rewritten in full on
    every accepted bind. The change limit is enforced here only; there
    is no server-side check.
    """

    def __init__(self, storage: BindingStorage, user_key: str, max_changes: int = DEFAULT_MAX_CHANGES):
        self._storage = storage
        self._user_key = user_key
        self._max_changes = max_changes
        self._binding = self._load()

    def current_binding(self) -> Optional[ChannelBinding]:
        """The stored binding, or None when the user has never bound a channel."""
        return self._binding if self._binding.is_bound else None

    @property
    def change_count(self) -> int:
        return self._binding.change_count

    @property
    def max_changes(self) -> int:
        return self._max_changes

    def can_rebind(self) -> bool:
        return self._binding.change_count < self._max_changes

    def try_bind(self, channel_id: str) -> ChannelBinding:
        """
        Binds the user to channel_id.

        Raises:
            ChangeLimitExceededError: If the user already used every allowed change
            ValueError: If channel_id is not a canonical channel ID
        """
        if not self.can_rebind():
            logger.warning(
                f"Bind rejected for {self._user_key}: {self._binding.change_count}/{self._max_changes} changes used"
            )
            raise ChangeLimitExceededError(f"Change limit of {self._max_changes} reached")

        if not is_canonical_id(channel_id):
            raise ValueError(f"Not a canonical channel ID: {channel_id!r}")

        updated = ChannelBinding(
            channel_id=channel_id,
            change_count=self._binding.change_count + 1,
            max_changes=self._max_changes
        )
        # Persist first; in-memory state only moves once the write succeeded.
        self._storage.write(self._user_key, updated.to_record())
        self._binding = updated

        logger.info(
            f"Channel {channel_id} bound for {self._user_key} "
            f"({updated.change_count}/{self._max_changes} changes used)"
        )
        return updated

    def _load(self) -> ChannelBinding:
        record = self._storage.read(self._user_key)
        if not record:
            return ChannelBinding(channel_id=None, change_count=0, max_changes=self._max_changes)

        channel_id = record.get("channel_id")
        if channel_id is not None and (not isinstance(channel_id, str) or not is_canonical_id(channel_id)):
            logger.error(f"Stored channel ID for {self._user_key} is invalid, treating as unbound: {channel_id!r}")
            channel_id = None

        change_count = record.get("change_count", 0)
        if isinstance(change_count, bool) or not isinstance(change_count, int):
            logger.error(f"Stored change count for {self._user_key} is invalid: {change_count!r}")
            change_count = 0
        change_count = min(max(change_count, 0), self._max_changes)

        return ChannelBinding(channel_id=channel_id, change_count=change_count, max_changes=self._max_changes)
