"""
Shared Test Configuration and Fixtures

Fakes for the external collaborators:
- YouTube discovery service (MagicMock with canned search/channels responses)
- Binding persistence (in-memory)
- Submission sink (records every call)

To run the tests:
    pip install -e ".[test]"
    pytest tests/
"""

from datetime import date, timezone
from typing import List, Optional
from unittest.mock import MagicMock

import pytest

from curation_pipeline.core.binding import ChannelBindingStore
from curation_pipeline.core.notifications import NotificationController
from curation_pipeline.core.selection import SelectionState
from curation_pipeline.core.session import CurationSession, UserIdentity
from curation_pipeline.core.storage import InMemoryBindingStorage
from curation_pipeline.core.submission import SinkResponse, SubmissionPipeline, SubmissionSink
from curation_pipeline.core.youtube import ChannelIdentifierResolver, VideoCatalogFetcher, YouTubeClient

CHANNEL_ID = "UC" + "a" * 22
CHANNEL_TITLE = "Vizla Gaming"
USER_EMAIL = "creator@example.com"


# =============================================================================
# YOUTUBE FAKES
# =============================================================================

def _request(response=None, error: Optional[Exception] = None) -> MagicMock:
    request = MagicMock()
    if error is not None:
        request.execute.side_effect = error
    else:
        request.execute.return_value = response
    return request


@pytest.fixture
def make_request():
    """
    Build a fake API request whose execute() returns a payload or raises.

    Usage:
        youtube_service.search.return_value.list.return_value = make_request({"items": []})
    """
    return _request


@pytest.fixture
def video_item():
    """Builder for one search.list item of kind video."""
    def build(video_id: str, published_at: str, title: str = "") -> dict:
        return {
            "id": {"kind": "youtube#video", "videoId": video_id},
            "snippet": {
                "publishedAt": published_at,
                "title": title or f"Video {video_id}",
                "thumbnails": {
                    "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                    "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
                },
            },
        }
    return build


@pytest.fixture
def youtube_service():
    """
    Fake discovery service. By default searches return nothing and the
    channels endpoint knows CHANNEL_ID.
    """
    service = MagicMock()
    service.search.return_value.list.return_value = _request({"items": []})
    service.channels.return_value.list.return_value = _request({
        "items": [{"id": CHANNEL_ID, "snippet": {"title": CHANNEL_TITLE, "customUrl": "@vizlagaming"}}]
    })
    return service


@pytest.fixture
def youtube_client(youtube_service):
    return YouTubeClient("test-api-key", service=youtube_service)


@pytest.fixture
def catalog(youtube_client):
    return VideoCatalogFetcher(youtube_client, max_results=25, tz=timezone.utc)


# =============================================================================
# SINK FAKES
# =============================================================================

class RecordingSink(SubmissionSink):
    """Records every send() and answers with a configurable response."""

    def __init__(self, response: Optional[SinkResponse] = None):
        self.response = response or SinkResponse(status="success")
        self.calls: List[tuple] = []
        self.on_send = None

    def send(self, sheet_name, entries):
        self.calls.append((sheet_name, list(entries)))
        if self.on_send is not None:
            self.on_send()
        return self.response


@pytest.fixture
def sink():
    return RecordingSink()


# =============================================================================
# SESSION
# =============================================================================

@pytest.fixture
def binding_storage():
    return InMemoryBindingStorage()


@pytest.fixture
def make_session(youtube_client, catalog, binding_storage, sink):
    """
    Build a CurationSession over the fakes. Pinned to 15 January 2025.

    Usage:
        session = make_session()
        session = make_session(identity=UserIdentity(authenticated=False))
    """
    def build(identity: Optional[UserIdentity] = None, bound: bool = False) -> CurationSession:
        identity = identity or UserIdentity(authenticated=True, name="Creator", email=USER_EMAIL)
        store = ChannelBindingStore(binding_storage, identity.user_key, max_changes=2)
        if bound:
            store.try_bind(CHANNEL_ID)
        return CurationSession(
            identity=identity,
            binding_store=store,
            resolver=ChannelIdentifierResolver(youtube_client),
            catalog=catalog,
            pipeline=SubmissionPipeline(sink),
            selection=SelectionState(),
            notifications=NotificationController(),
            today=lambda: date(2025, 1, 15)
        )
    return build
