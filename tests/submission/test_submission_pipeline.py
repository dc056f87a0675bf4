"""
Submission Pipeline Tests

Tests cover:
- Preconditions, in order, without touching the sink
- Entry building and the single dispatch
- Mapping sink replies to results and errors
- Non-reentrancy
"""

from datetime import datetime, timezone

import pytest

from curation_pipeline.core.errors import (
    ChannelNotReadyError,
    EmptySelectionError,
    SubmissionError,
    SubmissionInProgressError,
)
from curation_pipeline.core.submission import SinkResponse, SubmissionPipeline
from curation_pipeline.core.youtube import Video, VideoFormat


def _video(video_id, fmt=VideoFormat.VIDEO, day=10):
    video = Video.from_id(video_id, f"Video {video_id}", "", datetime(2025, 1, day, 9, 30, tzinfo=timezone.utc))
    video.selected = True
    video.format = fmt
    return video


@pytest.fixture
def pipeline(sink):
    return SubmissionPipeline(sink)


# =============================================================================
# PRECONDITIONS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("title", [None, "", "   ", "…loading"])
def test_missing_channel_title_is_not_ready(pipeline, sink, title):
    with pytest.raises(ChannelNotReadyError):
        pipeline.submit(title, [_video("a")], "January")

    assert sink.calls == []


@pytest.mark.unit
def test_channel_check_comes_before_selection_check(pipeline):
    with pytest.raises(ChannelNotReadyError):
        pipeline.submit(None, [], "January")


@pytest.mark.unit
def test_empty_selection_never_calls_sink(pipeline, sink):
    with pytest.raises(EmptySelectionError):
        pipeline.submit("Vizla Gaming", [], "January")

    assert sink.calls == []


# =============================================================================
# DISPATCH
# =============================================================================


@pytest.mark.unit
def test_submit_sends_one_request_with_ordered_entries(pipeline, sink):
    """
    Test a successful submission.

    Should:
    - Call the sink once with the channel title as sheet name
    - Build one entry per video, in selection order
    - Report the submitted count
    """
    selection = [_video("b", VideoFormat.SHORTS, day=20), _video("a", VideoFormat.LIVE, day=3)]

    result = pipeline.submit("Vizla Gaming", selection, "January")

    assert result.submitted_count == 2
    assert result.sheet_name == "Vizla Gaming"
    assert len(sink.calls) == 1

    sheet_name, entries = sink.calls[0]
    assert sheet_name == "Vizla Gaming"
    assert [e.to_dict() for e in entries] == [
        {
            "link": "https://www.youtube.com/watch?v=b",
            "title": "Video b",
            "format": "SHORTS",
            "month": "January",
            "publishedAt": "2025-01-20T09:30:00.000Z",
        },
        {
            "link": "https://www.youtube.com/watch?v=a",
            "title": "Video a",
            "format": "LIVE",
            "month": "January",
            "publishedAt": "2025-01-03T09:30:00.000Z",
        },
    ]


@pytest.mark.unit
def test_pipeline_does_not_touch_selection_flags(pipeline):
    selection = [_video("a")]

    pipeline.submit("Vizla Gaming", selection, "January")

    assert selection[0].selected is True


@pytest.mark.unit
def test_resubmitting_sends_again(pipeline, sink):
    """Duplicates downstream are accepted."""
    selection = [_video("a")]

    pipeline.submit("Vizla Gaming", selection, "January")
    pipeline.submit("Vizla Gaming", selection, "January")

    assert len(sink.calls) == 2


# =============================================================================
# SINK ERRORS
# =============================================================================


@pytest.mark.unit
def test_sink_error_status_carries_sink_message(pipeline, sink):
    sink.response = SinkResponse(status="error", message="db down")

    with pytest.raises(SubmissionError) as exc_info:
        pipeline.submit("Vizla Gaming", [_video("a")], "January")

    assert exc_info.value.sink_message == "db down"
    assert "db down" in exc_info.value.user_message
    assert not pipeline.in_flight


@pytest.mark.unit
def test_sink_error_without_message_uses_generic_text(pipeline, sink):
    sink.response = SinkResponse(status="error")

    with pytest.raises(SubmissionError) as exc_info:
        pipeline.submit("Vizla Gaming", [_video("a")], "January")

    assert exc_info.value.user_message == "Submission failed: Unknown error"


@pytest.mark.unit
def test_sink_exception_clears_in_flight(pipeline, sink):
    def explode():
        raise SubmissionError("unreachable")
    sink.on_send = explode

    with pytest.raises(SubmissionError):
        pipeline.submit("Vizla Gaming", [_video("a")], "January")

    assert not pipeline.in_flight


@pytest.mark.unit
def test_submit_is_not_reentrant(pipeline, sink):
    nested = []

    def resubmit():
        assert pipeline.in_flight
        with pytest.raises(SubmissionInProgressError):
            pipeline.submit("Vizla Gaming", [_video("b")], "January")
        nested.append(True)
    sink.on_send = resubmit

    pipeline.submit("Vizla Gaming", [_video("a")], "January")

    assert nested == [True]
    assert len(sink.calls) == 1


# =============================================================================
# RESPONSE SCHEMA
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("payload", [
    None,
    [],
    "success",
    {},
    {"status": "ok"},
    {"status": None, "message": "x"},
])
def test_sink_response_rejects_malformed_payloads(payload):
    with pytest.raises(ValueError):
        SinkResponse.from_payload(payload)


@pytest.mark.unit
def test_sink_response_parses_success_and_error():
    ok = SinkResponse.from_payload({"status": "success", "data": {"rows": 2}})
    bad = SinkResponse.from_payload({"status": "error", "message": "db down"})

    assert ok.ok and ok.data == {"rows": 2} and ok.message is None
    assert not bad.ok and bad.message == "db down"
