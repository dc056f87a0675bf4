"""
Curation Session
Interaction boundary: wires the components together and turns every
outcome into exactly one notification.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Union

from ..binding.binding_store import ChannelBindingStore
from ..errors import (
    CatalogFetchError,
    ChangeLimitExceededError,
    ChannelNotReadyError,
    ChannelUnresolvableError,
    EmptySelectionError,
    SubmissionError,
    SubmissionInProgressError,
)
from ..notifications.notification_controller import NotificationController
from ..selection.selection_state import SelectionState
from ..submission.models import SubmissionResult
from ..submission.submission_pipeline import SubmissionPipeline
from ..youtube.channel_resolver import ChannelIdentifierResolver
from ..youtube.video_catalog import MONTH_NAMES, VideoCatalogFetcher
from ..youtube.video_info import Video, VideoFormat

logger = logging.getLogger(__name__)

SIGN_IN_MESSAGE = "Sign in first."
NOT_LINKED_MESSAGE = "Link your YouTube channel first."
SAVE_FAILED_MESSAGE = "Could not save your channel. Please try again."
TITLE_PENDING_MESSAGE = "Its details could not be loaded from YouTube yet."


@dataclass(frozen=True)
class UserIdentity:
    """Signal from the identity provider."""
    authenticated: bool
    name: str = ""
    email: str = ""

    @property
    def user_key(self) -> str:
        return self.email.strip().lower()


class CurationSession:
    """
    One creator's session: bind a channel, browse a month, curate, submit.

    Failures never propagate out of the public operations; each one is
    logged with its technical detail and shown once through the
    notification controller (error for failures, info for precondition
    nudges, success for completed actions).
    """

    def __init__(
        self,
        identity: UserIdentity,
        binding_store: ChannelBindingStore,
        resolver: ChannelIdentifierResolver,
        catalog: VideoCatalogFetcher,
        pipeline: SubmissionPipeline,
        selection: Optional[SelectionState] = None,
        notifications: Optional[NotificationController] = None,
        today: Callable[[], date] = date.today
    ):
        self._identity = identity
        self._bindings = binding_store
        self._resolver = resolver
        self._catalog = catalog
        self._pipeline = pipeline
        self.selection = selection or SelectionState()
        self.notifications = notifications or NotificationController()
        self._today = today

        self.channel_title: Optional[str] = None
        self.month_index = today().month - 1
        self.year = today().year

    @property
    def identity(self) -> UserIdentity:
        return self._identity

    @property
    def channel_id(self) -> Optional[str]:
        binding = self._bindings.current_binding()
        return binding.channel_id if binding else None

    @property
    def bindings(self) -> ChannelBindingStore:
        return self._bindings

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month_index]

    @property
    def submitting(self) -> bool:
        return self._pipeline.in_flight

    def _require_auth(self) -> bool:
        if not self._identity.authenticated:
            self.notifications.info(SIGN_IN_MESSAGE)
            return False
        return True

    def start(self) -> None:
        """Loads the channel title when a channel is already bound."""
        if self._identity.authenticated and self.channel_id:
            self.load_channel_title()

    def bind_channel(self, channel_input: str) -> bool:
        if not self._require_auth():
            return False

        # The limit is checked before resolving so a user at the limit
        # never triggers a lookup.
        if not self._bindings.can_rebind():
            logger.info(f"{self._identity.user_key} tried to change channel past the limit")
            self.notifications.error(ChangeLimitExceededError.default_message)
            return False

        try:
            channel_id = self._resolver.resolve(channel_input)
            self._bindings.try_bind(channel_id)
        except ChannelUnresolvableError as e:
            logger.warning(f"Channel resolution failed ({e.reason.value}): {e}")
            self.notifications.error(e.user_message)
            return False
        except ChangeLimitExceededError as e:
            self.notifications.error(e.user_message)
            return False
        except OSError as e:
            logger.error(f"Could not persist channel binding: {e}")
            self.notifications.error(SAVE_FAILED_MESSAGE)
            return False

        self.channel_title = None
        self.selection.apply_load(self.selection.begin_load(), [])

        left = self._bindings.max_changes - self._bindings.change_count
        changes_left = f'You can change it {left} more time{"s" if left != 1 else ""}.'

        # binding is persisted here; only the title may be missing
        title = self.load_channel_title(notify=False)
        if title:
            self.notifications.success(f'Channel "{title}" linked. {changes_left}')
        else:
            self.notifications.info(f"Channel linked. {changes_left} {TITLE_PENDING_MESSAGE}")
        return True

    def load_channel_title(self, notify: bool = True) -> Optional[str]:
        channel_id = self.channel_id
        if not channel_id:
            return None

        try:
            channel = self._catalog.fetch_channel_info(channel_id)
        except CatalogFetchError as e:
            logger.error(f"Could not load channel title for {channel_id}: {e}")
            self.channel_title = None
            if notify:
                self.notifications.error(e.user_message)
            return None

        self.channel_title = channel.title
        return self.channel_title

    def change_month(self, month_index: int, year: Optional[int] = None) -> List[Video]:
        if not 0 <= month_index <= 11:
            raise ValueError(f"month_index must be between 0 and 11, got {month_index}")

        if not self._require_auth():
            return []

        channel_id = self.channel_id
        if not channel_id:
            self.notifications.info(NOT_LINKED_MESSAGE)
            return []

        self.month_index = month_index
        self.year = year if year is not None else self._today().year

        token = self.selection.begin_load()
        try:
            videos = self._catalog.fetch_month(channel_id, month_index, self.year)
        except CatalogFetchError as e:
            logger.error(f"Catalog fetch for {self.month_name} {self.year} failed: {e}")
            self.selection.fail_load(token)
            self.notifications.error(e.user_message)
            return []

        self.selection.apply_load(token, videos)
        return self.selection.videos

    def toggle(self, video_id: str) -> None:
        self.selection.toggle(video_id)

    def set_format(self, video_id: str, video_format: Union[str, VideoFormat]) -> bool:
        try:
            self.selection.set_format(video_id, video_format)
        except ValueError as e:
            self.notifications.error(str(e))
            return False
        return True

    def submit(self) -> Optional[SubmissionResult]:
        if not self._require_auth():
            return None

        try:
            result = self._pipeline.submit(self.channel_title, self.selection.selected(), self.month_name)
        except (ChannelNotReadyError, EmptySelectionError) as e:
            self.notifications.info(e.user_message)
            return None
        except (SubmissionError, SubmissionInProgressError) as e:
            logger.error(f"Submission failed: {e}")
            self.notifications.error(e.user_message)
            return None

        self.selection.clear_selection()
        self.notifications.success(
            f'{result.submitted_count} video{"s" if result.submitted_count != 1 else ""} '
            f'submitted to "{result.sheet_name}" sheet!'
        )
        return result
