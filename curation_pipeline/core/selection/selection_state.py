"""
Selection State
In-memory collection of fetched videos with per-item selection and format tags.
"""

import logging
from typing import Dict, List, Sequence, Union

from ..youtube.video_info import Video, VideoFormat

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Holds the videos of the current month window.

    Loads are stamped with a generation token: begin_load() issues a new
    token, and only the completion carrying the latest token is applied.
    Unknown video IDs are ignored by toggle() and set_format().
    """

    def __init__(self):
        self._videos: List[Video] = []
        self._index: Dict[str, Video] = {}
        self._generation = 0
        self._loading = False

    @property
    def videos(self) -> List[Video]:
        return list(self._videos)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        return self._generation

    def begin_load(self) -> int:
        """Discards the current collection and returns the token for the new load."""
        self._generation += 1
        self._replace([])
        self._loading = True
        return self._generation

    def apply_load(self, token: int, videos: Sequence[Video]) -> bool:
        if token != self._generation:
            logger.debug(f"Discarding stale load {token} (latest is {self._generation})")
            return False
        self._replace(videos)
        self._loading = False
        return True

    def fail_load(self, token: int) -> bool:
        return self.apply_load(token, [])

    def toggle(self, video_id: str) -> None:
        video = self._index.get(video_id)
        if video is not None:
            video.selected = not video.selected

    def set_format(self, video_id: str, video_format: Union[str, VideoFormat]) -> None:
        fmt = VideoFormat.parse(video_format)
        video = self._index.get(video_id)
        if video is not None:
            video.format = fmt

    def selected(self) -> List[Video]:
        return [v for v in self._videos if v.selected]

    def clear_selection(self) -> None:
        """Unselects every video. Formats are kept."""
        for video in self._videos:
            video.selected = False

    def _replace(self, videos: Sequence[Video]) -> None:
        self._videos = list(videos)
        self._index = {v.id: v for v in self._videos}

    def __len__(self) -> int:
        return len(self._videos)
