"""
Submission Domain Models
Wire shapes exchanged with the submission sink.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ..youtube.video_catalog import to_rfc3339
from ..youtube.video_info import Video, VideoFormat

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

ENTRY_COLUMNS = ["link", "title", "format", "month", "publishedAt"]


@dataclass(frozen=True)
class SubmissionEntry:
    """One selected video as recorded downstream."""
    link: str
    title: str
    format: VideoFormat
    month: str
    published_at: datetime

    @classmethod
    def from_video(cls, video: Video, month: str) -> "SubmissionEntry":
        return cls(
            link=video.url,
            title=video.title,
            format=video.format,
            month=month,
            published_at=video.published_at
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "link": self.link,
            "title": self.title,
            "format": self.format.value,
            "month": self.month,
            "publishedAt": to_rfc3339(self.published_at),
        }


@dataclass(frozen=True)
class SinkResponse:
    """Validated sink reply: {status: success|error, message?, data?}."""
    status: str
    message: Optional[str] = None
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS

    @classmethod
    def from_payload(cls, payload: Any) -> "SinkResponse":
        """
        Raises:
            ValueError: If the payload does not have the expected shape
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Sink response must be an object, got {type(payload).__name__}")

        status = payload.get("status")
        if status not in (STATUS_SUCCESS, STATUS_ERROR):
            raise ValueError(f"Sink response has invalid status: {status!r}")

        message = payload.get("message")
        if message is not None and not isinstance(message, str):
            message = str(message)

        return cls(status=status, message=message or None, data=payload.get("data"))


@dataclass(frozen=True)
class SubmissionResult:
    submitted_count: int
    sheet_name: str
    message: Optional[str] = None
    entries: tuple = field(default=(), repr=False)
