"""
Video Domain Model
One upload as shown to the creator for curation.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Union

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class VideoFormat(str, Enum):
    """User-assigned classification, independent of upstream metadata."""
    VIDEO = "VIDEO"
    SHORTS = "SHORTS"
    LIVE = "LIVE"

    @classmethod
    def parse(cls, value: Union[str, "VideoFormat"]) -> "VideoFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(
                f"Unknown format {value!r}, expected one of {', '.join(f.value for f in cls)}"
            )


@dataclass
class Video:
    """
    A fetched upload. Mutable: the creator toggles `selected` and
    picks a `format` in place.
    """
    id: str
    url: str
    title: str
    thumbnail: str
    published_at: datetime
    selected: bool = False
    format: VideoFormat = VideoFormat.VIDEO

    @classmethod
    def from_id(cls, video_id: str, title: str, thumbnail: str, published_at: datetime) -> "Video":
        return cls(
            id=video_id,
            url=WATCH_URL.format(video_id=video_id),
            title=title,
            thumbnail=thumbnail,
            published_at=published_at
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert object to dictionary for display or serialization."""
        data = asdict(self)
        data["published_at"] = self.published_at.isoformat()
        data["format"] = self.format.value
        return data
