"""
Submission Sink Tests

Tests cover:
- HTTP sink: payload shape and reply handling (requests session mocked)
- CSV sink: one file per sheet, appended across submissions
- Factory selection from configuration
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pandas as pd
import pytest
import requests

from curation_pipeline.core.config import ConfigLoader
from curation_pipeline.core.errors import SubmissionError
from curation_pipeline.core.submission import (
    CsvSheetSink,
    HttpSheetSink,
    SubmissionEntry,
    SubmissionSink,
    build_sink,
)
from curation_pipeline.core.youtube import VideoFormat

SINK_URL = "https://sheets.example.com/exec"


def _entry(video_id="a", fmt=VideoFormat.VIDEO):
    return SubmissionEntry(
        link=f"https://www.youtube.com/watch?v={video_id}",
        title=f"Video {video_id}",
        format=fmt,
        month="January",
        published_at=datetime(2025, 1, 10, tzinfo=timezone.utc)
    )


def _response(status_code=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = "" if body is None else str(body)
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def http_session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def http_sink(http_session):
    return HttpSheetSink(SINK_URL, timeout=5, session=http_session)


# =============================================================================
# HTTP SINK
# =============================================================================


@pytest.mark.unit
def test_http_sink_posts_sheet_name_and_entries(http_sink, http_session):
    http_session.post.return_value = _response(body={"status": "success"})

    reply = http_sink.send("Vizla Gaming", [_entry("a"), _entry("b", VideoFormat.SHORTS)])

    assert reply.ok
    http_session.post.assert_called_once()
    args, kwargs = http_session.post.call_args
    assert args == (SINK_URL,)
    assert kwargs["timeout"] == 5
    assert kwargs["json"]["sheetName"] == "Vizla Gaming"
    assert [e["format"] for e in kwargs["json"]["entries"]] == ["VIDEO", "SHORTS"]


@pytest.mark.unit
def test_http_sink_returns_error_reply(http_sink, http_session):
    http_session.post.return_value = _response(body={"status": "error", "message": "db down"})

    reply = http_sink.send("Vizla Gaming", [_entry()])

    assert not reply.ok
    assert reply.message == "db down"


@pytest.mark.unit
def test_http_sink_non_2xx_raises_with_message(http_sink, http_session):
    http_session.post.return_value = _response(503, body={"status": "error", "message": "maintenance"})

    with pytest.raises(SubmissionError) as exc_info:
        http_sink.send("Vizla Gaming", [_entry()])

    assert exc_info.value.sink_message == "maintenance"


@pytest.mark.unit
def test_http_sink_non_2xx_without_body_is_generic(http_sink, http_session):
    http_session.post.return_value = _response(500, json_error=True)

    with pytest.raises(SubmissionError) as exc_info:
        http_sink.send("Vizla Gaming", [_entry()])

    assert exc_info.value.user_message == "Submission failed: Unknown error"


@pytest.mark.unit
def test_http_sink_transport_failure_raises(http_sink, http_session):
    http_session.post.side_effect = requests.ConnectionError("refused")

    with pytest.raises(SubmissionError):
        http_sink.send("Vizla Gaming", [_entry()])


@pytest.mark.unit
@pytest.mark.parametrize("body, json_error", [
    (None, True),
    ({"result": "done"}, False),
])
def test_http_sink_malformed_reply_raises(http_sink, http_session, body, json_error):
    http_session.post.return_value = _response(body=body, json_error=json_error)

    with pytest.raises(SubmissionError):
        http_sink.send("Vizla Gaming", [_entry()])


# =============================================================================
# CSV SINK
# =============================================================================


@pytest.mark.unit
def test_csv_sink_appends_to_one_file_per_sheet(tmp_path):
    sink = CsvSheetSink(tmp_path)

    sink.send("Vizla Gaming", [_entry("a")])
    reply = sink.send("Vizla Gaming", [_entry("b", VideoFormat.LIVE), _entry("c")])

    assert reply.ok
    assert reply.data["rows"] == 2
    df = pd.read_csv(tmp_path / "Vizla Gaming.csv")
    assert list(df.columns) == ["link", "title", "format", "month", "publishedAt"]
    assert df["title"].tolist() == ["Video a", "Video b", "Video c"]
    assert df["format"].tolist() == ["VIDEO", "LIVE", "VIDEO"]


@pytest.mark.unit
def test_csv_sink_sanitises_sheet_file_name(tmp_path):
    sink = CsvSheetSink(tmp_path)

    assert sink.sheet_path("AC/DC: Live?").name == "AC_DC_ Live_.csv"


# =============================================================================
# FACTORY
# =============================================================================


@pytest.mark.unit
def test_build_sink_follows_mode(tmp_path):
    http_config = ConfigLoader(tmp_path / "unused.yaml").from_dict({"sink": {"url": SINK_URL}})
    csv_config = ConfigLoader(tmp_path / "unused.yaml").from_dict({"sink": {"mode": "csv"}})

    assert isinstance(build_sink(http_config, tmp_path), HttpSheetSink)
    assert isinstance(build_sink(csv_config, tmp_path), CsvSheetSink)


@pytest.mark.unit
def test_sink_without_send_cannot_be_constructed():
    class SilentSink(SubmissionSink):
        pass

    with pytest.raises(TypeError):
        SilentSink()
