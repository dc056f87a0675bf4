"""
Submission Pipeline
Turns the current selection into one request to the submission sink.
"""

import logging
from typing import Optional, Sequence

from ..errors import ChannelNotReadyError, EmptySelectionError, SubmissionError, SubmissionInProgressError
from ..youtube.video_info import Video
from .models import SubmissionEntry, SubmissionResult
from .sinks import SubmissionSink

logger = logging.getLogger(__name__)

# Titles shown while the channel is still loading or failed to load.
PLACEHOLDER_TITLES = {"", "…loading", "...loading"}


def is_resolved_title(channel_title: Optional[str]) -> bool:
    return channel_title is not None and channel_title.strip().lower() not in PLACEHOLDER_TITLES


class SubmissionPipeline:
    """
    Service responsible for submitting a curated selection.

    Responsibilities:
    - Check preconditions (channel title ready, selection non-empty).
    - Build one SubmissionEntry per selected video, keeping order.
    - Dispatch a single request and map the sink reply to a result or error.

    At most one attempt per call, no deduplication against earlier
    submissions. Calls are non-reentrant: a submit while another is
    outstanding raises SubmissionInProgressError.
    """

    def __init__(self, sink: SubmissionSink):
        self._sink = sink
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def submit(self, channel_title: Optional[str], selection: Sequence[Video], month: str) -> SubmissionResult:
        if self._in_flight:
            raise SubmissionInProgressError("Submit called while another submission is outstanding")

        if not is_resolved_title(channel_title):
            raise ChannelNotReadyError(f"Channel title not ready: {channel_title!r}")

        if not selection:
            raise EmptySelectionError("Nothing selected")

        entries = [SubmissionEntry.from_video(v, month) for v in selection]
        logger.info(f"Submitting {len(entries)} entries to sheet {channel_title!r} ({month})")

        self._in_flight = True
        try:
            response = self._sink.send(channel_title, entries)
        finally:
            self._in_flight = False

        if not response.ok:
            logger.error(f"Sink rejected submission to {channel_title!r}: {response.message}")
            raise SubmissionError("Sink reported an error", sink_message=response.message or "")

        logger.info(f"Submission to {channel_title!r} accepted")
        return SubmissionResult(
            submitted_count=len(entries),
            sheet_name=channel_title,
            message=response.message,
            entries=tuple(entries)
        )
